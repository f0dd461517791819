# riot/platforms.py – Tables région ↔ plateforme (source unique)
# ============================================================================
# account-v1 est routé par région (americas/europe/asia), summoner-v4 et
# league-v4 par plateforme. Un PUUID ne dit pas sur quelle plateforme vit le
# joueur : d'où le fan-out sur toutes les plateformes d'une région.
# ============================================================================

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple

from lolstats.riot.errors import ConfigurationError, InvalidRegionError
from lolstats.riot.riot_id import RiotId


class Region(str, Enum):
    AMERICAS = "americas"
    EUROPE = "europe"
    ASIA = "asia"


class Platform(str, Enum):
    NA1 = "na1"
    BR1 = "br1"
    LA1 = "la1"
    LA2 = "la2"
    EUW1 = "euw1"
    EUN1 = "eun1"
    TR1 = "tr1"
    RU = "ru"
    ME1 = "me1"
    KR = "kr"
    JP1 = "jp1"
    OC1 = "oc1"
    SG2 = "sg2"
    TW2 = "tw2"
    VN2 = "vn2"


# Ordre = ordre d'envoi du fan-out et de départage en cas d'égalité
REGION_PLATFORMS: Dict[Region, Tuple[Platform, ...]] = {
    Region.AMERICAS: (Platform.NA1, Platform.BR1, Platform.LA1, Platform.LA2),
    Region.EUROPE: (Platform.EUW1, Platform.EUN1, Platform.TR1, Platform.RU, Platform.ME1),
    Region.ASIA: (Platform.KR, Platform.JP1, Platform.OC1, Platform.SG2, Platform.TW2, Platform.VN2),
}

PLATFORM_REGION: Dict[Platform, Region] = {
    platform: region
    for region, platforms in REGION_PLATFORMS.items()
    for platform in platforms
}

DEFAULT_PLATFORM: Dict[Region, Platform] = {
    Region.AMERICAS: Platform.NA1,
    Region.EUROPE: Platform.EUW1,
    Region.ASIA: Platform.KR,
}

# Tags "régionaux" courants. Purement indicatif : le tag est choisi par le joueur.
TAG_ALIASES: Dict[str, Platform] = {
    "na1": Platform.NA1, "na": Platform.NA1,
    "br1": Platform.BR1, "br": Platform.BR1,
    "la1": Platform.LA1, "lan": Platform.LA1,
    "la2": Platform.LA2, "las": Platform.LA2,
    "euw1": Platform.EUW1, "euw": Platform.EUW1,
    "eun1": Platform.EUN1, "eun": Platform.EUN1, "eune": Platform.EUN1,
    "tr1": Platform.TR1, "tr": Platform.TR1,
    "ru": Platform.RU, "ru1": Platform.RU,
    "me1": Platform.ME1, "me": Platform.ME1,
    "kr": Platform.KR, "kr1": Platform.KR,
    "jp1": Platform.JP1, "jp": Platform.JP1,
    "oc1": Platform.OC1, "oc": Platform.OC1, "oce": Platform.OC1,
    "sg2": Platform.SG2, "sg": Platform.SG2,
    "tw2": Platform.TW2, "tw": Platform.TW2,
    "vn2": Platform.VN2, "vn": Platform.VN2,
}

API_HOST = "api.riotgames.com"


def _check_tables() -> None:
    """Every platform in exactly one region, every region has a default of its own."""
    seen = [p for platforms in REGION_PLATFORMS.values() for p in platforms]
    if sorted(seen) != sorted(Platform):
        raise ConfigurationError("REGION_PLATFORMS must list every platform exactly once")
    if set(REGION_PLATFORMS) != set(Region):
        raise ConfigurationError("REGION_PLATFORMS must cover every region")
    for region, platform in DEFAULT_PLATFORM.items():
        if platform not in REGION_PLATFORMS[region]:
            raise ConfigurationError(f"Default platform {platform.value} is not in {region.value}")
    if set(DEFAULT_PLATFORM) != set(Region):
        raise ConfigurationError("DEFAULT_PLATFORM must cover every region")
    if set(TAG_ALIASES.values()) != set(Platform):
        raise ConfigurationError("TAG_ALIASES must cover every platform")


_check_tables()


def parse_region(value: object) -> Region:
    """Turn a user-supplied region string into a Region, or raise InvalidRegionError."""
    if isinstance(value, Region):
        return value
    if isinstance(value, str):
        try:
            return Region(value.strip().lower())
        except ValueError:
            pass
    raise InvalidRegionError(value, tuple(r.value for r in Region))


def _as_region(region: object) -> Region:
    try:
        return Region(region)
    except ValueError:
        raise ConfigurationError(f"Unknown region: {region!r}") from None


def platforms_for(region: Region | str) -> Tuple[Platform, ...]:
    """Platforms of a region, in fan-out order."""
    return REGION_PLATFORMS[_as_region(region)]


def default_platform(region: Region | str) -> Platform:
    """Representative platform of a region. A hint only, never a reason to skip the fan-out."""
    return DEFAULT_PLATFORM[_as_region(region)]


def region_for_platform(platform: Platform | str) -> Region:
    try:
        return PLATFORM_REGION[Platform(platform)]
    except ValueError:
        raise ConfigurationError(f"Unknown platform: {platform!r}") from None


def platform_hint(riot_id: RiotId | str) -> Optional[Platform]:
    """Best-effort guess from the tag line ("Faker#KR1" → kr). Used for logging only."""
    if isinstance(riot_id, RiotId):
        tag = riot_id.tag_line
    else:
        parts = riot_id.split("#")
        if len(parts) < 2:
            return None
        tag = parts[1]
    return TAG_ALIASES.get(tag.strip().lower())


def regional_base_url(region: Region | str) -> str:
    return f"https://{_as_region(region).value}.{API_HOST}"


def platform_base_url(platform: Platform | str) -> str:
    try:
        return f"https://{Platform(platform).value}.{API_HOST}"
    except ValueError:
        raise ConfigurationError(f"Unknown platform: {platform!r}") from None
