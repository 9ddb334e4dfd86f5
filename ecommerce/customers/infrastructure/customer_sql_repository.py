import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import FlushError

from ecommerce.core.database import transaction
from ecommerce.customers.domain.address import Address
from ecommerce.customers.domain.customer_entity import Customer
from ecommerce.customers.domain.exceptions import (
    CustomerNotFoundException, CustomerConstraintViolationException
)
from ecommerce.customers.domain.repositories import AbstractCustomerRepository
from ecommerce.customers.infrastructure.customer_orm_model import CustomerModel

logger = logging.getLogger(__name__)


def _map_orm_to_entity(customer_db: CustomerModel) -> Customer:
    """Convertit un CustomerModel (ORM) en Customer (Domaine)."""
    address = None
    if customer_db.street is not None:
        address = Address(
            street=customer_db.street,
            number=customer_db.number,
            zipcode=customer_db.zipcode,
            city=customer_db.city,
        )
    return Customer(
        id=customer_db.id,
        name=customer_db.name,
        address=address,
        active=customer_db.active,
        reward_points=customer_db.reward_points,
    )


def _apply_entity_to_orm(customer: Customer, customer_db: CustomerModel) -> CustomerModel:
    """Recopie les champs du Customer (Domaine) sur la ligne ORM."""
    address = customer.address
    customer_db.name = customer.name
    customer_db.street = address.street if address else None
    customer_db.number = address.number if address else None
    customer_db.zipcode = address.zipcode if address else None
    customer_db.city = address.city if address else None
    customer_db.active = customer.active
    customer_db.reward_points = customer.reward_points
    return customer_db


class CustomerSQLRepository(AbstractCustomerRepository):
    """Implémentation SQLAlchemy du repository des clients."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, customer: Customer) -> None:
        logger.debug(f"[Repo Customer] Création client ID: {customer.id}")
        customer_db = _apply_entity_to_orm(customer, CustomerModel(id=customer.id, name=customer.name))
        try:
            async with transaction(self.session):
                self.session.add(customer_db)
                await self.session.flush()
        except (IntegrityError, FlushError) as e:
            logger.error(f"[Repo Customer] Erreur intégrité création client {customer.id}: {e}", exc_info=True)
            raise CustomerConstraintViolationException(customer.id, str(e)) from e
        logger.info(f"[Repo Customer] Client ID {customer.id} créé.")

    async def find(self, customer_id: str) -> Customer:
        logger.debug(f"[Repo Customer] Récupération client ID: {customer_id}")
        stmt = (
            select(CustomerModel)
            .where(CustomerModel.id == customer_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        customer_db = result.scalar_one_or_none()
        if customer_db is None:
            logger.warning(f"[Repo Customer] Client ID {customer_id} non trouvé.")
            raise CustomerNotFoundException(customer_id)
        return _map_orm_to_entity(customer_db)

    async def find_all(self) -> List[Customer]:
        logger.debug("[Repo Customer] Listage de tous les clients")
        stmt = (
            select(CustomerModel)
            .order_by(CustomerModel.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return [_map_orm_to_entity(c) for c in result.scalars().all()]

    async def update(self, customer: Customer) -> None:
        logger.debug(f"[Repo Customer] MAJ client ID: {customer.id}")
        customer_db = await self.session.get(CustomerModel, customer.id, populate_existing=True)
        if customer_db is None:
            logger.warning(f"[Repo Customer] Client ID {customer.id} non trouvé pour MAJ.")
            raise CustomerNotFoundException(customer.id)
        try:
            async with transaction(self.session):
                _apply_entity_to_orm(customer, customer_db)
                await self.session.flush()
        except IntegrityError as e:
            logger.error(f"[Repo Customer] Erreur intégrité MAJ client {customer.id}: {e}", exc_info=True)
            raise CustomerConstraintViolationException(customer.id, str(e)) from e
        logger.info(f"[Repo Customer] Client ID {customer.id} mis à jour.")
