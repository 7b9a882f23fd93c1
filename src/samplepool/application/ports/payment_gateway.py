"""Payment gateway port - external order creation and callback verification."""

from dataclasses import dataclass
from typing import Protocol


@dataclass
class PaymentOrder:
    """Order issued by the payment provider. amount is in minor units."""

    id: str
    amount: int
    currency: str


class PaymentGateway(Protocol):
    """Port for the payment provider."""

    @property
    def key_id(self) -> str: ...

    async def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
        notes: dict[str, str],
    ) -> PaymentOrder: ...

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool: ...
