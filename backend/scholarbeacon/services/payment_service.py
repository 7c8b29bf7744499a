"""
ScholarBeacon Backend: Stripe Payment Service
=============================================

What:  Creates Stripe PaymentIntents for scholarship application fees.
How:   Converts the fee into cents, calls `stripe.PaymentIntent.create_async`
       (currency "usd", card payments only) and returns the client secret.
Who:   Called by POST /create-payment-intent.

Resilience:
    - Only stripe.APIConnectionError is retried (tenacity, exponential
      backoff with jitter). Card, amount and authentication errors are final.
    - All attempts of one call share an idempotency key, so a retry after a
      lost response returns the intent Stripe already created instead of
      creating a second one.
"""

import logging
import time
import uuid

import stripe
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from scholarbeacon.config import settings
from scholarbeacon.exceptions import PaymentServiceError
from scholarbeacon.services.payment_base import Amount, PaymentProcessor, to_minor_units

logger = logging.getLogger(__name__)


def retry_wait(min_wait: float, max_wait: float):
    """
    Exponential backoff starting at `min_wait`, capped at `max_wait`, plus up
    to `min_wait` seconds of random jitter.
    """
    return wait_exponential(multiplier=min_wait, max=max_wait) + wait_random(0, min_wait)


class StripePaymentService(PaymentProcessor):
    """Stripe implementation of PaymentProcessor."""

    PAYMENT_METHOD_TYPES = ["card"]

    def __init__(self, api_key: str = "", currency: str = "usd"):
        self.api_key = api_key
        self.currency = currency

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def create_payment_intent(self, fee: Amount) -> str:
        """
        Create a PaymentIntent for `fee` currency units.

        Raises:
            PaymentServiceError: Missing secret key, Stripe rejection, or
                connection failures outlasting the retries.
        """
        amount = to_minor_units(fee)
        idempotency_key = str(uuid.uuid4())

        if not self.is_configured():
            logger.error("Payment intent requested but STRIPE_SECRET_KEY is not set")
            raise PaymentServiceError(context={"reason": "stripe_not_configured"})

        logger.info(
            "[%s] Creating payment intent for %d %s",
            idempotency_key[:8], amount, self.currency,
        )

        try:
            intent = await self._create_with_retry(amount, idempotency_key)
        except stripe.StripeError as e:
            logger.error(
                "[%s] Stripe rejected payment intent: %s",
                idempotency_key[:8], getattr(e, "user_message", None) or str(e),
            )
            raise PaymentServiceError(
                context={
                    "error_type": type(e).__name__,
                    "stripe_code": getattr(e, "code", None),
                    "amount": amount,
                }
            )

        return intent.client_secret

    @retry(
        retry=retry_if_exception_type(stripe.APIConnectionError),
        stop=stop_after_attempt(settings.payment_retry_max_attempts),
        wait=retry_wait(settings.payment_retry_min_wait, settings.payment_retry_max_wait),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _create_with_retry(self, amount: int, idempotency_key: str) -> "stripe.PaymentIntent":
        start_time = time.perf_counter()
        intent = await stripe.PaymentIntent.create_async(
            api_key=self.api_key,
            idempotency_key=idempotency_key,
            amount=amount,
            currency=self.currency,
            payment_method_types=self.PAYMENT_METHOD_TYPES,
        )
        logger.info(
            "[%s] Payment intent %s created in %.0fms",
            idempotency_key[:8], intent.id, (time.perf_counter() - start_time) * 1000,
        )
        return intent


payment_service = StripePaymentService(
    api_key=settings.stripe_secret_key,
    currency=settings.payment_currency,
)
