# riot/fanout.py
# ============================================================================
# Interroge toutes les plateformes d'une région en parallèle.
# account-v1 donne un PUUID mais pas la plateforme : la plupart répondent 404,
# une seule a les données. On attend TOUTES les réponses avant de choisir
# (un [] vide ne doit pas battre une liste remplie arrivée plus tard).
# ============================================================================

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, List, TypeVar, Union

from lolstats.riot.client import RiotClient
from lolstats.riot.errors import NotFoundError
from lolstats.riot.models import Profile, RankedEntry
from lolstats.riot.platforms import Platform, Region, platforms_for

log = logging.getLogger(__name__)

T = TypeVar("T")

QueryFn = Callable[[str, Platform], Awaitable[T]]


@dataclass(frozen=True)
class PlatformResult(Generic[T]):
    platform: Platform
    data: T


def _has_data(data: object) -> bool:
    # str est une Sequence mais pas une liste de résultats
    return isinstance(data, Sequence) and not isinstance(data, (str, bytes)) and len(data) > 0


def select_result(
    platforms: Sequence[Platform],
    outcomes: Sequence[Union[T, BaseException]],
    region: Region | str,
) -> PlatformResult[T]:
    """
    Pick the winner among settled outcomes (same order as `platforms`).

    1. first success holding a non-empty sequence
    2. otherwise first success, even empty
    3. otherwise NotFoundError for the whole region
    """
    successes = [
        PlatformResult(platform, outcome)
        for platform, outcome in zip(platforms, outcomes)
        if not isinstance(outcome, BaseException)
    ]

    for result in successes:
        if _has_data(result.data):
            return result
    if successes:
        return successes[0]

    region_name = getattr(region, "value", region)
    raise NotFoundError(f"Player not found on any platform in {region_name}")


async def query_all_platforms(key: str, region: Region, query_fn: QueryFn) -> PlatformResult:
    """
    Run `query_fn(key, platform)` on every platform of `region` at once.

    Individual failures (mostly 404s) are expected and only logged at DEBUG;
    only "every platform failed" escapes, as NotFoundError.
    """
    platforms = platforms_for(region)
    log.debug(f"Querying {len(platforms)} platforms in {getattr(region, 'value', region)}")

    outcomes = await asyncio.gather(
        *(query_fn(key, platform) for platform in platforms),
        return_exceptions=True,
    )

    for platform, outcome in zip(platforms, outcomes):
        if isinstance(outcome, asyncio.CancelledError):
            # on ne masque pas une annulation de la requête entière
            raise outcome
        if isinstance(outcome, BaseException):
            log.debug(f"{platform.value}: {outcome.__class__.__name__}: {outcome}")

    result = select_result(platforms, outcomes, region)
    log.debug(f"Selected platform {result.platform.value}")
    return result


async def query_profile(client: RiotClient, puuid: str, region: Region) -> PlatformResult[Profile]:
    return await query_all_platforms(puuid, region, client.fetch_profile)


async def query_ranked_entries(
    client: RiotClient, puuid: str, region: Region
) -> PlatformResult[List[RankedEntry]]:
    return await query_all_platforms(puuid, region, client.fetch_ranked_entries)
