import re
from enum import Enum

_NON_PRINTABLE = re.compile(r'[^\x20-\x7E]')


class PaymentMethod(str, Enum):
    """
    Payment methods accepted at checkout.

    Values are stored verbatim in orders.payment_method and compared
    case-sensitively against what the client submits.
    """

    CASH_ON_DELIVERY = "Cash on Delivery"
    CREDIT_CARD = "Credit Card"
    PAYPAL = "PayPal"

    @classmethod
    def from_client(cls, value: str) -> 'PaymentMethod | None':
        """
        Resolve a client-submitted payment method.

        Non-printable characters (anything outside ASCII 0x20-0x7E) are
        removed and surrounding whitespace trimmed before the exact match.

        Returns:
            Matching PaymentMethod or None if the value is not accepted
        """
        cleaned = _NON_PRINTABLE.sub('', value or '').strip()
        for method in cls:
            if method.value == cleaned:
                return method
        return None
