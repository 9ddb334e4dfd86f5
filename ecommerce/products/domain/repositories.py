from abc import ABC, abstractmethod
from typing import List

from .product_entity import Product


class AbstractProductRepository(ABC):
    """Interface abstraite pour le repository des Produits."""

    @abstractmethod
    async def create(self, product: Product) -> None:
        raise NotImplementedError

    @abstractmethod
    async def find(self, product_id: str) -> Product:
        """Récupère un produit par son ID. Lève ProductNotFoundException si absent."""
        raise NotImplementedError

    @abstractmethod
    async def find_all(self) -> List[Product]:
        raise NotImplementedError

    @abstractmethod
    async def update(self, product: Product) -> None:
        raise NotImplementedError
