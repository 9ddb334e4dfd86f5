from typing import Optional, List
from decimal import Decimal
from sqlmodel import SQLModel, Field, Relationship

# --- Modèles de base pour OrderItem ---

class OrderItemBase(SQLModel):
    """Base pour les champs de la table OrderItem."""
    name: str = Field(max_length=255)
    # Prix figé au moment de la commande
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    quantity: int = Field(gt=0)
    order_id: str = Field(foreign_key="orders.id", index=True, max_length=36)
    product_id: str = Field(foreign_key="products.id", index=True, max_length=36)

class OrderItemModel(OrderItemBase, table=True):
    """Modèle de table pour les lignes de commande."""
    id: str = Field(primary_key=True, max_length=36)
    # Rang de la ligne dans la commande (ordre d'insertion)
    position: int = Field(default=0)

    # Relations
    order: Optional["OrderModel"] = Relationship(back_populates="items")

    __tablename__ = "order_items"

# --- Modèles de base pour Order ---

class OrderBase(SQLModel):
    """Base pour les champs de la table Order."""
    customer_id: str = Field(foreign_key="customers.id", index=True, max_length=36)
    # Dénormalisé: recalculé depuis Order.total() à chaque écriture
    total: Decimal = Field(ge=0, max_digits=12, decimal_places=2)

class OrderModel(OrderBase, table=True):
    """Modèle de table pour les commandes."""
    id: str = Field(primary_key=True, max_length=36)

    # Relations
    items: List["OrderItemModel"] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "OrderItemModel.position",
        },
    )

    __tablename__ = "orders"

# --- Schémas de lecture (projection persistée) ---

class OrderItemRead(SQLModel):
    """Projection d'une ligne de commande telle que stockée."""
    id: str
    name: str
    price: Decimal
    quantity: int
    order_id: str
    product_id: str

class OrderRead(SQLModel):
    """Projection d'une commande telle que stockée, avec ses lignes."""
    id: str
    customer_id: str
    total: Decimal
    items: List[OrderItemRead] = []
