"""Razorpay payment gateway over the Orders REST API."""

import hashlib
import hmac
import logging

import httpx

from samplepool.application.ports import PaymentOrder
from samplepool.domain.exceptions import PaymentGatewayError

logger = logging.getLogger(__name__)


def payment_signature(secret: str, order_id: str, payment_id: str) -> str:
    """HMAC-SHA256 of "order_id|payment_id" keyed with secret, hex encoded."""
    message = f"{order_id}|{payment_id}".encode()
    return hmac.new(secret.encode(), message, hashlib.sha256).hexdigest()


class RazorpayGateway:
    """Creates orders and verifies checkout callback signatures."""

    def __init__(
        self,
        key_id: str,
        key_secret: str,
        api_url: str = "https://api.razorpay.com/v1",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._key_id = key_id
        self._key_secret = key_secret
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def key_id(self) -> str:
        return self._key_id

    async def create_order(
        self,
        amount: int,
        currency: str,
        receipt: str,
        notes: dict[str, str],
    ) -> PaymentOrder:
        """Create an order for amount minor units. Any failure raises PaymentGatewayError."""
        try:
            async with httpx.AsyncClient(
                auth=(self._key_id, self._key_secret),
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                r = await client.post(
                    f"{self._api_url}/orders",
                    json={
                        "amount": amount,
                        "currency": currency,
                        "receipt": receipt,
                        "notes": notes,
                    },
                )
                r.raise_for_status()
                data = r.json()
            return PaymentOrder(
                id=data["id"],
                amount=int(data.get("amount", amount)),
                currency=data.get("currency", currency),
            )
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.error("Payment order creation failed: %s", e)
            raise PaymentGatewayError("Failed to create payment order") from e

    def verify_signature(self, order_id: str, payment_id: str, signature: str) -> bool:
        expected = payment_signature(self._key_secret, order_id, payment_id)
        return hmac.compare_digest(expected, signature or "")
