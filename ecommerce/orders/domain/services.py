import logging
import uuid
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from ecommerce.customers.domain.customer_entity import Customer

from .exceptions import EmptyOrderException
from .order_entity import Order, OrderItem

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class OrderService:
    """Services du domaine opérant sur les commandes."""

    @staticmethod
    def total(orders: List[Order]) -> Decimal:
        return sum((order.total() for order in orders), Decimal("0"))

    @staticmethod
    def place_order(customer: Customer, items: List[OrderItem]) -> Order:
        """Crée une commande pour le client et lui crédite la moitié du total en points."""
        if not items:
            raise EmptyOrderException(customer.id)

        order = Order(id=str(uuid.uuid4()), customer_id=customer.id, items=list(items))
        # Les points sont stockés au centime près
        customer.add_reward_points((order.total() / 2).quantize(CENT, rounding=ROUND_HALF_UP))
        logger.info(
            f"[OrderService] Commande {order.id} passée pour client {customer.id}, "
            f"total {order.total()}, points fidélité: {customer.reward_points}"
        )
        return order
