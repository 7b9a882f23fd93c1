"""Application ports - interfaces for external adapters."""

from samplepool.application.ports.payment_gateway import PaymentGateway, PaymentOrder
from samplepool.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PaymentGateway",
    "PaymentOrder",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
