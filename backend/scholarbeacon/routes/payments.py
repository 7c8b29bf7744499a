"""
ScholarBeacon Backend: Payment Route
====================================

What:  POST /create-payment-intent with body {fee}; responds {clientSecret}.
"""

from fastapi import APIRouter

from scholarbeacon.schemas.api import ErrorResponse, PaymentIntentRequest, PaymentIntentResponse
from scholarbeacon.services.payment_service import payment_service

router = APIRouter(tags=["Payments"])


@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponse,
    responses={500: {"description": "Payment processor error", "model": ErrorResponse}},
    summary="Create a Stripe payment intent",
    description="Charges `fee` (in USD) by card; returns the client secret.",
)
async def create_payment_intent(body: PaymentIntentRequest) -> PaymentIntentResponse:
    client_secret = await payment_service.create_payment_intent(body.fee)
    return PaymentIntentResponse(client_secret=client_secret)
