import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Charger les variables d'environnement AVANT de définir la classe Settings
load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


# Classe de configuration utilisant Pydantic BaseSettings
class Settings(BaseSettings):
    # --- Base de Données ---
    # sqlite+aiosqlite en local, postgresql+asyncpg en production
    DATABASE_URL: str = "sqlite+aiosqlite:///./ecommerce.db"
    DB_ECHO_LOG: bool = False

    # --- Logging ---
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        # Charger depuis les variables d'environnement (respecte load_dotenv)
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Instancier la classe de configuration
settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure le logging racine avec le niveau donné (ou LOG_LEVEL)."""
    level_name = (level or settings.LOG_LEVEL).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        logger.warning(f"Niveau de log '{level_name}' inconnu. Utilisation de INFO.")
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(numeric_level)
    logger.debug(f"Logging configuré au niveau {logging.getLevelName(numeric_level)}.")
