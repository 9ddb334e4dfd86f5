from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .address import Address
from .exceptions import CustomerAddressRequiredException


class Customer(BaseModel):
    """Représente un client dans le domaine métier."""
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(..., min_length=1, max_length=36)
    name: str = Field(..., min_length=1, max_length=255)
    address: Optional[Address] = None
    active: bool = False
    reward_points: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)

    def change_name(self, name: str) -> None:
        self.name = name

    def change_address(self, address: Address) -> None:
        # Address est immuable: on remplace l'objet valeur entier
        self.address = address

    def activate(self) -> None:
        if self.address is None:
            raise CustomerAddressRequiredException(self.id)
        self.active = True

    def deactivate(self) -> None:
        self.active = False

    def is_active(self) -> bool:
        return self.active

    def add_reward_points(self, points: Decimal) -> None:
        self.reward_points = self.reward_points + Decimal(points)
