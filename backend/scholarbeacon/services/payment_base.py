"""
ScholarBeacon Backend: Abstract Payment Processor Interface
===========================================================

What:  The contract the payment route relies on, independent of provider.
How:   Concrete processors (StripePaymentService) implement
       create_payment_intent() and is_configured().
Who:   routes/payments.py (create_payment_intent) and routes/root.py (is_configured for /health).
"""

from abc import ABC, abstractmethod
from decimal import ROUND_DOWN, Decimal
from typing import Union

Amount = Union[int, float, str, Decimal]


def to_minor_units(fee: Amount) -> int:
    """
    Convert a currency amount into integer minor units (cents).

    The amount is multiplied by 100 and truncated toward zero. The product is
    computed on the decimal text of `fee`, so binary float error cannot push
    it below a whole cent:

        >>> to_minor_units(19.99)
        1999
        >>> to_minor_units(0)
        0
        >>> to_minor_units("10.999")
        1099
    """
    amount = Decimal(str(fee)) * 100
    return int(amount.to_integral_value(rounding=ROUND_DOWN))


class PaymentProcessor(ABC):
    """
    Creates payment intents with an external processor.

    Contract:
        - create_payment_intent() takes an amount in currency units and
          returns the processor's client secret, opaque to this service
        - every provider-specific failure is raised as PaymentServiceError
    """

    @abstractmethod
    async def create_payment_intent(self, fee: Amount) -> str:
        """
        Args:
            fee: Amount in currency units (e.g. 19.99 dollars).

        Returns:
            The client secret the frontend uses to confirm the payment.

        Raises:
            PaymentServiceError: The processor rejected the request or could
                not be reached.
        """
        ...

    @abstractmethod
    def is_configured(self) -> bool:
        """True when credentials for the processor are present."""
        ...
