import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import FlushError

from ecommerce.core.database import transaction
from ecommerce.orders.domain.exceptions import (
    OrderNotFoundException, OrderConstraintViolationException
)
from ecommerce.orders.domain.order_entity import Order, OrderItem
from ecommerce.orders.domain.repositories import AbstractOrderRepository
from ecommerce.orders.infrastructure.order_orm_model import OrderModel, OrderItemModel

logger = logging.getLogger(__name__)


def _map_item_orm_to_entity(item_db: OrderItemModel) -> OrderItem:
    return OrderItem(
        id=item_db.id,
        name=item_db.name,
        price=item_db.price,
        product_id=item_db.product_id,
        quantity=item_db.quantity,
    )


def _map_orm_to_entity(order_db: OrderModel) -> Order:
    """Reconstruit l'agrégat Order depuis la ligne commande et ses lignes (déjà chargées)."""
    return Order(
        id=order_db.id,
        customer_id=order_db.customer_id,
        items=[_map_item_orm_to_entity(item_db) for item_db in order_db.items],
    )


def _apply_item_to_orm(item: OrderItem, position: int, item_db: OrderItemModel) -> OrderItemModel:
    item_db.name = item.name
    item_db.price = item.price
    item_db.product_id = item.product_id
    item_db.quantity = item.quantity
    item_db.position = position
    return item_db


def _map_entity_to_orm(order: Order) -> OrderModel:
    """Convertit l'agrégat Order en OrderModel avec ses OrderItemModel."""
    order_db = OrderModel(id=order.id, customer_id=order.customer_id, total=order.total())
    order_db.items = [
        _apply_item_to_orm(item, position, OrderItemModel(id=item.id, order_id=order.id))
        for position, item in enumerate(order.items)
    ]
    return order_db


class OrderSQLRepository(AbstractOrderRepository):
    """Implémentation SQLAlchemy du repository de Commandes."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _load(self, order_id: str) -> Optional[OrderModel]:
        stmt = (
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .options(selectinload(OrderModel.items))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, order: Order) -> None:
        logger.debug(f"[Repo Order] Création commande ID: {order.id} ({len(order.items)} ligne(s))")
        order_db = _map_entity_to_orm(order)
        try:
            async with transaction(self.session):
                # Les lignes suivent la commande (cascade save-update)
                self.session.add(order_db)
                await self.session.flush()
        except (IntegrityError, FlushError) as e:
            logger.error(f"[Repo Order] Erreur intégrité création commande {order.id}: {e}", exc_info=True)
            raise OrderConstraintViolationException(order.id, str(e)) from e
        logger.info(f"[Repo Order] Commande ID {order.id} créée pour client {order.customer_id}.")

    async def find(self, order_id: str) -> Order:
        logger.debug(f"[Repo Order] Récupération commande ID: {order_id}")
        order_db = await self._load(order_id)
        if order_db is None:
            logger.warning(f"[Repo Order] Commande ID {order_id} non trouvée.")
            raise OrderNotFoundException(order_id)
        return _map_orm_to_entity(order_db)

    async def find_all(self) -> List[Order]:
        logger.debug("[Repo Order] Listage de toutes les commandes")
        stmt = (
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .order_by(OrderModel.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return [_map_orm_to_entity(order_db) for order_db in result.scalars().all()]

    async def update(self, order: Order) -> None:
        logger.debug(f"[Repo Order] MAJ commande ID: {order.id}")
        order_db = await self._load(order.id)
        if order_db is None:
            logger.warning(f"[Repo Order] Commande ID {order.id} non trouvée pour MAJ.")
            raise OrderNotFoundException(order.id)

        try:
            async with transaction(self.session):
                order_db.customer_id = order.customer_id
                order_db.total = order.total()

                # Remplacement complet: les lignes absentes sont supprimées (delete-orphan),
                # les lignes de même ID réécrites, les nouvelles insérées.
                existing = {item_db.id: item_db for item_db in order_db.items}
                items_db = []
                for position, item in enumerate(order.items):
                    item_db = existing.pop(item.id, None)
                    if item_db is None:
                        item_db = OrderItemModel(id=item.id, order_id=order.id)
                    items_db.append(_apply_item_to_orm(item, position, item_db))
                order_db.items = items_db
                await self.session.flush()
        except (IntegrityError, FlushError) as e:
            logger.error(f"[Repo Order] Erreur intégrité MAJ commande {order.id}: {e}", exc_info=True)
            raise OrderConstraintViolationException(order.id, str(e)) from e
        logger.info(
            f"[Repo Order] Commande ID {order.id} mise à jour "
            f"({len(items_db)} ligne(s), {len(existing)} supprimée(s))."
        )
