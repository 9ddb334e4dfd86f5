from abc import ABC, abstractmethod
from typing import List

from .order_entity import Order

class AbstractOrderRepository(ABC):
    """Interface abstraite pour le repository des Commandes."""

    @abstractmethod
    async def create(self, order: Order) -> None:
        """Persiste la commande et toutes ses lignes en une seule transaction."""
        raise NotImplementedError

    @abstractmethod
    async def find(self, order_id: str) -> Order:
        """Récupère une commande et ses lignes. Lève OrderNotFoundException si absente."""
        raise NotImplementedError

    @abstractmethod
    async def find_all(self) -> List[Order]:
        raise NotImplementedError

    @abstractmethod
    async def update(self, order: Order) -> None:
        """Réécrit la commande et remplace entièrement ses lignes.
        Lève OrderNotFoundException si la commande n'existe pas (pas d'upsert).
        """
        raise NotImplementedError
