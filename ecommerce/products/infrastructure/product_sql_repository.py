import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import FlushError

from ecommerce.core.database import transaction
from ecommerce.products.domain.exceptions import (
    ProductNotFoundException, ProductConstraintViolationException
)
from ecommerce.products.domain.product_entity import Product
from ecommerce.products.domain.repositories import AbstractProductRepository
from ecommerce.products.infrastructure.product_orm_model import ProductModel

logger = logging.getLogger(__name__)


def _map_orm_to_entity(product_db: ProductModel) -> Product:
    return Product(id=product_db.id, name=product_db.name, price=product_db.price)


def _map_entity_to_orm(product: Product) -> ProductModel:
    return ProductModel(id=product.id, name=product.name, price=product.price)


class ProductSQLRepository(AbstractProductRepository):
    """Implémentation SQLAlchemy du repository des produits."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, product: Product) -> None:
        logger.debug(f"[Repo Product] Création produit ID: {product.id}")
        try:
            async with transaction(self.session):
                self.session.add(_map_entity_to_orm(product))
                await self.session.flush()
        except (IntegrityError, FlushError) as e:
            logger.error(f"[Repo Product] Erreur intégrité création produit {product.id}: {e}", exc_info=True)
            raise ProductConstraintViolationException(product.id, str(e)) from e
        logger.info(f"[Repo Product] Produit ID {product.id} créé.")

    async def find(self, product_id: str) -> Product:
        logger.debug(f"[Repo Product] Récupération produit ID: {product_id}")
        product_db = await self.session.get(ProductModel, product_id, populate_existing=True)
        if product_db is None:
            logger.warning(f"[Repo Product] Produit ID {product_id} non trouvé.")
            raise ProductNotFoundException(product_id)
        return _map_orm_to_entity(product_db)

    async def find_all(self) -> List[Product]:
        logger.debug("[Repo Product] Listage de tous les produits")
        stmt = (
            select(ProductModel)
            .order_by(ProductModel.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return [_map_orm_to_entity(p) for p in result.scalars().all()]

    async def update(self, product: Product) -> None:
        logger.debug(f"[Repo Product] MAJ produit ID: {product.id}")
        product_db = await self.session.get(ProductModel, product.id, populate_existing=True)
        if product_db is None:
            logger.warning(f"[Repo Product] Produit ID {product.id} non trouvé pour MAJ.")
            raise ProductNotFoundException(product.id)
        try:
            async with transaction(self.session):
                product_db.name = product.name
                product_db.price = product.price
                await self.session.flush()
        except IntegrityError as e:
            logger.error(f"[Repo Product] Erreur intégrité MAJ produit {product.id}: {e}", exc_info=True)
            raise ProductConstraintViolationException(product.id, str(e)) from e
        logger.info(f"[Repo Product] Produit ID {product.id} mis à jour.")
