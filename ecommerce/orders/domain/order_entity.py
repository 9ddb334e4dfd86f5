from decimal import Decimal
from typing import List

from pydantic import BaseModel, Field

# Entités du Domaine "Orders"

class OrderItem(BaseModel):
    id: str = Field(..., min_length=1, max_length=36)
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2) # Prix au moment de la commande
    product_id: str = Field(..., min_length=1, max_length=36)
    quantity: int = Field(..., gt=0)

    def total(self) -> Decimal:
        return self.price * self.quantity

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderItem):
            return NotImplemented
        return (
            self.id == other.id
            and self.name == other.name
            and self.price == other.price
            and self.product_id == other.product_id
            and self.quantity == other.quantity
        )


class Order(BaseModel):
    """Racine d'agrégat: seule voie d'accès à ses lignes de commande."""
    id: str = Field(..., min_length=1, max_length=36)
    customer_id: str = Field(..., min_length=1, max_length=36)
    items: List[OrderItem] = Field(..., min_length=1)

    def total(self) -> Decimal:
        return sum((item.total() for item in self.items), Decimal("0"))

    def add_item(self, item: OrderItem) -> None:
        self.items.append(item)

    def __eq__(self, other: object) -> bool:
        # Égalité structurelle: même ID, même client, mêmes lignes dans le même ordre
        if not isinstance(other, Order):
            return NotImplemented
        return (
            self.id == other.id
            and self.customer_id == other.customer_id
            and len(self.items) == len(other.items)
            and all(mine == theirs for mine, theirs in zip(self.items, other.items))
        )
