from decimal import Decimal
from sqlmodel import SQLModel, Field

# --- Modèle Product SQLModel ---

class ProductBase(SQLModel):
    name: str = Field(max_length=255)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)

class ProductModel(ProductBase, table=True):
    id: str = Field(primary_key=True, max_length=36)

    __tablename__ = "products"

# Schéma de lecture pour ProductModel
class ProductRead(ProductBase):
    id: str

# --- Fin Modèle Product SQLModel ---
