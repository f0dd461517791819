# services/lookup.py
# ============================================================================
# Riot ID → compte + profil + ranked, en une réponse agrégée.
#   1. validation (format + région)
#   2. cache
#   3. account-v1 (région)
#   4. summoner-v4 sur toutes les plateformes  → obligatoire
#   5. league-v4 sur toutes les plateformes    → facultatif (dégradé en null)
#   6. fusion + mise en cache
# ============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from lolstats.cache import AggregationCache
from lolstats.riot import riot_id as riot_ids
from lolstats.riot.client import RiotClient
from lolstats.riot.errors import RiotError
from lolstats.riot.fanout import query_profile, query_ranked_entries
from lolstats.riot.models import (
    FLEX_QUEUE,
    SOLO_DUO_QUEUE,
    AggregateResult,
    RankedEntry,
)
from lolstats.riot.platforms import Region, parse_region, platform_hint

log = logging.getLogger(__name__)

DEFAULT_REGION = Region.AMERICAS


@dataclass(frozen=True)
class LookupResult:
    result: AggregateResult
    cached: bool

    def to_dict(self) -> dict:
        return {"success": True, "cached": self.cached, "data": self.result.to_dict()}


def pick_queue(entries: Iterable[RankedEntry], queue_type: str) -> Optional[RankedEntry]:
    """First entry for `queue_type`; duplicates are not expected from Riot."""
    return next((e for e in entries if e.queue_type == queue_type), None)


class LookupService:
    """Request orchestrator. One instance per process, shared by every request."""

    def __init__(self, client: RiotClient, cache: AggregationCache, default_region: object = DEFAULT_REGION):
        self.client = client
        self.cache = cache
        self.default_region = parse_region(default_region)

    async def lookup(self, raw_riot_id: object, region: object = None) -> LookupResult:
        """
        Resolve a raw Riot ID into an AggregateResult.

        Raises:
            FormatError / InvalidRegionError: bad input, nothing sent upstream
            NotFoundError: unknown account, or no platform knows the PUUID
            InvalidApiKeyError, RateLimitError, UpstreamError: account or profile stage failed
        """
        riot_id = riot_ids.parse(raw_riot_id)
        reg = self.default_region if region is None else parse_region(region)

        cached = self.cache.get_account(raw_riot_id, reg.value)
        if cached is not None:
            log.info(f"Cache hit for {riot_id} ({reg.value})")
            return LookupResult(result=cached, cached=True)

        hint = platform_hint(riot_id)
        log.info(f"Lookup {riot_id} in {reg.value} (tag hint: {hint.value if hint else 'none'})")

        account = await self.client.resolve_account(riot_id.game_name, riot_id.tag_line, reg)

        profile_res = await query_profile(self.client, account.puuid, reg)
        profile = profile_res.data.with_display_name(account.game_name)

        entries: List[RankedEntry] = []
        ranked_source: Optional[str] = None
        try:
            ranked_res = await query_ranked_entries(self.client, account.puuid, reg)
            entries = list(ranked_res.data)
            ranked_source = ranked_res.platform.value
        except RiotError as e:
            log.warning(f"Ranked stats unavailable for {riot_id}: {e.message}")

        result = AggregateResult(
            account=account,
            profile=profile,
            solo_duo=pick_queue(entries, SOLO_DUO_QUEUE),
            flex=pick_queue(entries, FLEX_QUEUE),
            profile_source=profile_res.platform.value,
            ranked_source=ranked_source,
        )

        self.cache.cache_account(raw_riot_id, reg.value, result)
        return LookupResult(result=result, cached=False)
