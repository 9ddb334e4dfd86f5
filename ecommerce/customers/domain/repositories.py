from abc import ABC, abstractmethod
from typing import List

from .customer_entity import Customer


class AbstractCustomerRepository(ABC):
    """Interface abstraite pour le repository des Clients."""

    @abstractmethod
    async def create(self, customer: Customer) -> None:
        """Persiste un nouveau client (adresse aplatie dans la ligne client)."""
        raise NotImplementedError

    @abstractmethod
    async def find(self, customer_id: str) -> Customer:
        """Récupère un client par son ID. Lève CustomerNotFoundException si absent."""
        raise NotImplementedError

    @abstractmethod
    async def find_all(self) -> List[Customer]:
        raise NotImplementedError

    @abstractmethod
    async def update(self, customer: Customer) -> None:
        """Réécrit tous les champs d'un client existant."""
        raise NotImplementedError
