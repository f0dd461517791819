# cache.py – Cache mémoire TTL (un seul process, perdu au redémarrage)
# ============================================================================
# Deux espaces de clés dans le même store :
#   account:{riotId}:{region}  → réponse agrégée
#   icon:{iconId}              → PNG de l'icône de profil
# Le TTL borne la fraîcheur ; max_keys n'est qu'un garde-fou (éviction par âge).
# ============================================================================

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

log = logging.getLogger(__name__)


def account_key(riot_id: str, region: str) -> str:
    return f"account:{riot_id}:{region}"


def icon_key(icon_id: int) -> str:
    return f"icon:{icon_id}"


@dataclass
class CacheEntry:
    __slots__ = ("value", "expires_at", "stored_at")

    value: Any
    expires_at: float
    stored_at: float


@dataclass(frozen=True)
class CacheStats:
    keys: int
    hits: int
    misses: int

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return (self.hits / total * 100) if total else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keys": self.keys,
            "hits": self.hits,
            "misses": self.misses,
            "hitRate": round(self.hit_rate, 1),
        }


class TTLCache:
    """Dict-backed TTL store. Insertion order doubles as age order for eviction."""

    def __init__(
        self,
        max_keys: int = 1000,
        default_ttl: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_keys = max(1, max_keys)
        self.default_ttl = default_ttl
        self._clock = clock
        self._store: Dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    def __len__(self) -> int:
        return len(self.keys())

    def _expired(self, entry: CacheEntry, now: float) -> bool:
        return entry.expires_at <= now

    def get(self, key: str) -> Optional[Any]:
        entry = self._store.get(key)
        if entry is None:
            self._misses += 1
            return None
        if self._expired(entry, self._clock()):
            del self._store[key]
            self._misses += 1
            return None
        self._hits += 1
        return entry.value

    def has(self, key: str) -> bool:
        """Like get() but without touching the hit/miss counters."""
        entry = self._store.get(key)
        return entry is not None and not self._expired(entry, self._clock())

    def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        now = self._clock()
        ttl = self.default_ttl if ttl is None else ttl
        # ré-insertion → la clé redevient la plus jeune
        self._store.pop(key, None)
        if len(self._store) >= self.max_keys:
            self._make_room()
        self._store[key] = CacheEntry(value=value, expires_at=now + ttl, stored_at=now)

    def delete(self, key: str) -> bool:
        return self._store.pop(key, None) is not None

    def purge_expired(self) -> int:
        now = self._clock()
        dead = [k for k, e in self._store.items() if self._expired(e, now)]
        for k in dead:
            del self._store[k]
        return len(dead)

    def _make_room(self) -> None:
        purged = self.purge_expired()
        evicted = 0
        while len(self._store) >= self.max_keys:
            oldest = next(iter(self._store))
            del self._store[oldest]
            evicted += 1
        if evicted:
            log.warning(f"Cache full ({self.max_keys} keys): purged {purged} expired, evicted {evicted} oldest")

    def keys(self) -> List[str]:
        now = self._clock()
        return [k for k, e in self._store.items() if not self._expired(e, now)]

    def stats(self) -> CacheStats:
        return CacheStats(keys=len(self.keys()), hits=self._hits, misses=self._misses)


class AggregationCache:
    """Account/icon helpers on top of one TTLCache, with the configured TTLs."""

    def __init__(self, store: TTLCache, account_ttl: float = 86400, icon_ttl: float = 86400):
        self.store = store
        self.account_ttl = account_ttl
        self.icon_ttl = icon_ttl

    def get_account(self, riot_id: str, region: str) -> Optional[Any]:
        return self.store.get(account_key(riot_id, region))

    def cache_account(self, riot_id: str, region: str, data: Any) -> None:
        self.store.set(account_key(riot_id, region), data, self.account_ttl)

    def get_icon(self, icon_id: int) -> Optional[Any]:
        return self.store.get(icon_key(icon_id))

    def cache_icon(self, icon_id: int, data: Any) -> None:
        self.store.set(icon_key(icon_id), data, self.icon_ttl)

    def stats(self) -> CacheStats:
        return self.store.stats()

    def keys(self) -> List[str]:
        return self.store.keys()


async def log_stats_periodically(cache: AggregationCache, interval: float = 60) -> None:
    """Log one stats line every `interval` seconds while the cache holds something."""
    while True:
        await asyncio.sleep(interval)
        cache.store.purge_expired()
        stats = cache.stats()
        if stats.keys > 0:
            log.info(
                f"Cache Stats: {stats.keys} keys, {stats.hits} hits, "
                f"{stats.misses} misses, {stats.hit_rate:.1f}% hit rate"
            )
