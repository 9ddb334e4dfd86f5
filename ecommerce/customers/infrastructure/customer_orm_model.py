from typing import Optional
from decimal import Decimal
from sqlmodel import SQLModel, Field

# --- Modèle Customer SQLModel ---
# L'adresse (objet valeur) est aplatie dans la ligne client.

class CustomerBase(SQLModel):
    name: str = Field(max_length=255)
    street: Optional[str] = Field(default=None, max_length=255)
    number: Optional[int] = Field(default=None)
    zipcode: Optional[str] = Field(default=None, max_length=20)
    city: Optional[str] = Field(default=None, max_length=100)
    active: bool = Field(default=False)
    reward_points: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)

class CustomerModel(CustomerBase, table=True):
    id: str = Field(primary_key=True, max_length=36)

    __tablename__ = "customers"

# Schéma de lecture pour CustomerModel
class CustomerRead(CustomerBase):
    id: str

# --- Fin Modèle Customer SQLModel ---
