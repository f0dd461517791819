# context.py – Objets partagés par tout le process (créés une seule fois)

from __future__ import annotations

from dataclasses import dataclass

from lolstats.cache import AggregationCache, TTLCache
from lolstats.config import Settings
from lolstats.riot.client import RiotClient
from lolstats.services.icons import IconService
from lolstats.services.lookup import LookupService


@dataclass
class AppContext:
    """
    Process-wide state: settings, the Riot client (holds the API key),
    the single in-memory cache and the services built on them.

    Lives from app startup to shutdown; one event loop, so no locking
    around the cache.
    """
    settings: Settings
    client: RiotClient
    cache: AggregationCache
    lookup: LookupService
    icons: IconService

    async def aclose(self) -> None:
        await self.client.close()
        await self.icons.close()


def build_context(settings: Settings) -> AppContext:
    client = RiotClient(
        settings.RIOT_API_KEY,
        timeout=settings.REQUEST_TIMEOUT,
        quota_max=settings.RIOT_QUOTA_MAX,
        quota_window=settings.RIOT_QUOTA_WINDOW,
    )
    cache = AggregationCache(
        TTLCache(max_keys=settings.CACHE_MAX_KEYS, default_ttl=settings.CACHE_DEFAULT_TTL),
        account_ttl=settings.CACHE_ACCOUNT_TTL,
        icon_ttl=settings.CACHE_ICON_TTL,
    )
    return AppContext(
        settings=settings,
        client=client,
        cache=cache,
        lookup=LookupService(client, cache, default_region=settings.DEFAULT_REGION),
        icons=IconService(cache, timeout=settings.REQUEST_TIMEOUT),
    )
