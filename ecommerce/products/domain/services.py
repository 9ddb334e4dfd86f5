import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from .product_entity import Product

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class ProductService:
    """Services du domaine opérant sur plusieurs produits."""

    @staticmethod
    def increase_price(products: List[Product], percentage: Decimal) -> List[Product]:
        """Augmente le prix de chaque produit de `percentage` %."""
        rate = Decimal(percentage) / Decimal(100)
        for product in products:
            new_price = product.price + product.price * rate
            product.change_price(new_price.quantize(CENT, rounding=ROUND_HALF_UP))
        logger.info(f"[ProductService] Prix de {len(products)} produit(s) augmenté(s) de {percentage}%.")
        return products
