# services/icons.py – Icônes de profil via Data Dragon (CDN versionné)

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import aiohttp

from lolstats.cache import AggregationCache
from lolstats.riot.errors import InvalidInputError, NotFoundError

log = logging.getLogger(__name__)

DDRAGON = "https://ddragon.leagueoflegends.com"
VERSIONS_URL = f"{DDRAGON}/api/versions.json"

# Versions connues, de la plus récente à la plus ancienne
PINNED_VERSIONS: tuple[str, ...] = ("14.24.1", "14.1.1", "13.24.1", "13.1.1", "12.23.1")


def icon_url(icon_id: int, version: str) -> str:
    return f"{DDRAGON}/cdn/{version}/img/profileicon/{icon_id}.png"


def candidate_versions(latest: Optional[str], pinned: Sequence[str] = PINNED_VERSIONS) -> List[str]:
    """Latest first (when known), then the pinned list, without duplicates."""
    ordered = ([latest] if latest else []) + list(pinned)
    return list(dict.fromkeys(ordered))


@dataclass(frozen=True)
class IconAsset:
    data: bytes
    content_type: str = "image/png"


class IconService:
    """Fetches profile icons; no Riot token is ever sent to the CDN."""

    def __init__(self, cache: AggregationCache, timeout: float = 10, pinned: Sequence[str] = PINNED_VERSIONS):
        self.cache = cache
        self.timeout = timeout
        self.pinned = tuple(pinned)
        self._session: Optional[aiohttp.ClientSession] = None
        self._latest: Optional[str] = None
        self._lock = asyncio.Lock()

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout))
        return self._session

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()

    async def latest_version(self) -> Optional[str]:
        """versions.json[0], remembered for the process lifetime. None if the lookup fails."""
        if self._latest:
            return self._latest
        async with self._lock:
            if self._latest:
                return self._latest
            session = await self._get_session()
            try:
                async with session.get(VERSIONS_URL) as r:
                    r.raise_for_status()
                    versions = await r.json()
                self._latest = versions[0] if versions else None
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError, LookupError, TypeError) as e:
                log.warning(f"Data Dragon version lookup failed, using pinned versions: {e}")
                return None
            return self._latest

    async def _fetch(self, icon_id: int, version: str) -> Optional[IconAsset]:
        session = await self._get_session()
        try:
            async with session.get(icon_url(icon_id, version)) as r:
                if r.status != 200:
                    log.debug(f"Icon {icon_id} @ {version}: HTTP {r.status}")
                    return None
                data = await r.read()
                return IconAsset(data=data, content_type=r.headers.get("Content-Type", "image/png"))
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.debug(f"Icon {icon_id} @ {version}: {e.__class__.__name__}")
            return None

    async def get_icon(self, icon_id: object) -> IconAsset:
        if isinstance(icon_id, bool) or not isinstance(icon_id, int) or icon_id < 0:
            raise InvalidInputError(f"Invalid profile icon id: {icon_id!r}")

        cached = self.cache.get_icon(icon_id)
        if cached is not None:
            return cached

        for version in candidate_versions(await self.latest_version(), self.pinned):
            asset = await self._fetch(icon_id, version)
            if asset is not None:
                self.cache.cache_icon(icon_id, asset)
                return asset

        raise NotFoundError(f"Profile icon {icon_id} not found")
