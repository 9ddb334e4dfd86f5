from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field

# Entité du Domaine "Products"

class Product(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(..., min_length=1, max_length=36)
    name: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)

    def change_name(self, name: str) -> None:
        self.name = name

    def change_price(self, price: Decimal) -> None:
        self.price = price
