import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
)
from sqlalchemy.pool import StaticPool
# Toutes les tables (SQLModel) partagent SQLModel.metadata
from sqlmodel import SQLModel

from ecommerce.core.config import settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite n'applique pas les clés étrangères par défaut
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Crée un moteur asynchrone. Pour SQLite, active les clés étrangères."""
    engine_kwargs = {"echo": echo}
    if database_url.startswith("sqlite") and ":memory:" in database_url:
        # Une base en mémoire n'existe que sur sa connexion: on la partage
        engine_kwargs["poolclass"] = StaticPool

    engine = create_async_engine(database_url, **engine_kwargs)

    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    logger.debug(f"Moteur SQLAlchemy Async créé pour le dialecte '{engine.dialect.name}'.")
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,  # Empêche les objets d'expirer après commit
    )


engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO_LOG)
AsyncSessionLocal = build_session_factory(engine)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Fournit une session DB asynchrone, fermée en fin d'utilisation."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception as e:
            logger.error(f"Erreur durant la session DB, rollback: {e}", exc_info=True)
            await session.rollback()
            raise
        finally:
            await session.close()
            logger.debug("Session DB fermée.")


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """Délimite une unité d'écriture: commit en cas de succès, rollback sinon.

    Les repositories y regroupent l'écriture de la ligne parente et de ses
    lignes enfants pour qu'aucune écriture partielle ne soit visible.
    """
    try:
        yield session
        await session.commit()
    except BaseException:
        await session.rollback()
        logger.debug("Transaction annulée (rollback).")
        raise


def load_models() -> None:
    """Importe tous les modèles de table pour peupler SQLModel.metadata."""
    from ecommerce.customers.infrastructure import customer_orm_model  # noqa: F401
    from ecommerce.products.infrastructure import product_orm_model  # noqa: F401
    from ecommerce.orders.infrastructure import order_orm_model  # noqa: F401


async def create_tables(target: Optional[AsyncEngine] = None) -> None:
    """Crée toutes les tables définies via SQLModel."""
    load_models()
    async with (target or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Tables créées.")


async def drop_tables(target: Optional[AsyncEngine] = None) -> None:
    """Supprime toutes les tables définies via SQLModel."""
    load_models()
    async with (target or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    logger.info("Tables supprimées.")
