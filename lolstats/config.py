# config.py – Chargement des paramètres via pydantic-settings

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # — Riot API —
    RIOT_API_KEY: str = Field(min_length=1, repr=False)  # jamais loguée
    REQUEST_TIMEOUT: float = 10          # secondes, par appel Riot / CDN
    RIOT_QUOTA_MAX: int = 100            # quota dev : 100 reqs / 120 s (0 = off)
    RIOT_QUOTA_WINDOW: int = 120
    DEFAULT_REGION: str = "americas"

    # — Serveur HTTP —
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # — Cache mémoire —
    CACHE_MAX_KEYS: int = 1000
    CACHE_DEFAULT_TTL: int = 300
    CACHE_ACCOUNT_TTL: int = 86400       # 24 h
    CACHE_ICON_TTL: int = 86400
    CACHE_STATS_INTERVAL: int = 60       # 0 = pas de log périodique

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, built on first use. Raises ValidationError without RIOT_API_KEY."""
    return Settings()
