# Standard Library
import uuid
from typing import AsyncGenerator, Callable, Awaitable

# Third-Party Libraries
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine

# First-Party Libraries
from ecommerce.core.database import build_engine, build_session_factory, create_tables
from ecommerce.customers.domain.address import Address
from ecommerce.customers.domain.customer_entity import Customer
from ecommerce.customers.infrastructure.customer_sql_repository import CustomerSQLRepository
from ecommerce.orders.domain.order_entity import Order, OrderItem
from ecommerce.products.domain.product_entity import Product
from ecommerce.products.infrastructure.product_sql_repository import ProductSQLRepository

# URL de base pour la DB en mémoire
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# --- Fixtures de Base ---

@pytest_asyncio.fixture(scope="function")
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Crée un engine en mémoire et ses tables pour chaque test."""
    engine = build_engine(TEST_DATABASE_URL)
    await create_tables(engine)
    yield engine
    await engine.dispose()

@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Fournit une session DB ouverte avant le test et fermée après."""
    session_factory = build_session_factory(db_engine)
    async with session_factory() as session:
        yield session

# --- Fixtures de données ---

@pytest_asyncio.fixture(scope="function")
async def generate_item(db_session: AsyncSession) -> Callable[..., Awaitable[OrderItem]]:
    """Crée le produit en base et renvoie une ligne de commande (quantité 2) pour ce produit."""
    async def _generate(product_id: str = "123") -> OrderItem:
        product = Product(id=product_id, name=f"Product {product_id}", price=10)
        await ProductSQLRepository(db_session).create(product)
        return OrderItem(
            id=str(uuid.uuid4()),
            name=product.name,
            price=product.price,
            product_id=product.id,
            quantity=2,
        )
    return _generate

@pytest_asyncio.fixture(scope="function")
async def generate_order(
    db_session: AsyncSession, generate_item
) -> Callable[..., Awaitable[Order]]:
    """Crée client et produit en base et renvoie une commande d'une ligne (non persistée)."""
    async def _generate(order_id: str = "123", customer_id: str = "123", product_id: str = "123") -> Order:
        customer = Customer(id=customer_id, name=f"Customer {customer_id}")
        customer.change_address(Address(street="Street 1", number=1, zipcode="Zipcode 1", city="City 1"))
        await CustomerSQLRepository(db_session).create(customer)

        order_item = await generate_item(product_id)
        return Order(id=order_id, customer_id=customer.id, items=[order_item])
    return _generate
