# riot/models.py
# ============================================================================
# DTO Riot normalisés (account-v1, summoner-v4, league-v4) + réponse agrégée.
# Tous immuables : créés par requête, éventuellement mis en cache tels quels.
# ============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from lolstats.riot.errors import UpstreamError

SOLO_DUO_QUEUE = "RANKED_SOLO_5x5"
FLEX_QUEUE = "RANKED_FLEX_SR"


def _require(data: Any, *fields: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise UpstreamError(f"Malformed upstream payload: expected an object, got {type(data).__name__}", 502)
    missing = [f for f in fields if f not in data]
    if missing:
        raise UpstreamError(f"Malformed upstream payload: missing {', '.join(missing)}", 502)
    return data


def _int(data: Dict[str, Any], field: str) -> int:
    # null côté Riot = champ absent
    value = data.get(field)
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise UpstreamError(f"Malformed upstream payload: {field} is not a number", 502) from e


def win_rate(wins: int, losses: int) -> Optional[int]:
    """Percentage of wins rounded half up (12.5 -> 13), None when no game was played."""
    games = wins + losses
    if games <= 0:
        return None
    return (200 * wins + games) // (2 * games)


@dataclass(frozen=True)
class Account:
    puuid: str
    game_name: str
    tag_line: str

    @classmethod
    def from_api(cls, data: Any) -> "Account":
        data = _require(data, "puuid")
        return cls(
            puuid=data["puuid"],
            game_name=data.get("gameName") or "",
            tag_line=data.get("tagLine") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"puuid": self.puuid, "gameName": self.game_name, "tagLine": self.tag_line}


@dataclass(frozen=True)
class Profile:
    id: str
    account_id: str
    puuid: str
    display_name: str
    profile_icon_id: int
    level: int
    last_updated: Optional[int] = None

    @classmethod
    def from_api(cls, data: Any) -> "Profile":
        """Summoner-V4 no longer always sends id/accountId/name; fall back on the PUUID."""
        data = _require(data, "puuid")
        puuid = data["puuid"]
        return cls(
            id=data.get("id") or puuid,
            account_id=data.get("accountId") or puuid,
            puuid=puuid,
            display_name=data.get("name") or "",
            profile_icon_id=_int(data, "profileIconId"),
            level=_int(data, "summonerLevel"),
            last_updated=data.get("revisionDate"),
        )

    def with_display_name(self, name: str) -> "Profile":
        if self.display_name:
            return self
        return Profile(
            id=self.id,
            account_id=self.account_id,
            puuid=self.puuid,
            display_name=name,
            profile_icon_id=self.profile_icon_id,
            level=self.level,
            last_updated=self.last_updated,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "accountId": self.account_id,
            "puuid": self.puuid,
            "displayName": self.display_name,
            "profileIconId": self.profile_icon_id,
            "level": self.level,
            "lastUpdated": self.last_updated,
        }


@dataclass(frozen=True)
class MiniSeries:
    """Promotion series (BO3/BO5), removed by Riot in 2022 but still in the DTO."""
    target: int
    wins: int
    losses: int
    progress: str

    def to_dict(self) -> Dict[str, Any]:
        return {"target": self.target, "wins": self.wins, "losses": self.losses, "progress": self.progress}


@dataclass(frozen=True)
class RankedEntry:
    queue_type: str
    tier: str
    rank: str
    league_points: int
    wins: int
    losses: int
    hot_streak: bool = False
    veteran: bool = False
    fresh_blood: bool = False
    inactive: bool = False
    mini_series: Optional[MiniSeries] = None

    @classmethod
    def from_api(cls, data: Any) -> "RankedEntry":
        data = _require(data, "queueType")
        series = data.get("miniSeries")
        return cls(
            queue_type=data["queueType"],
            tier=data.get("tier", ""),
            rank=data.get("rank", ""),
            league_points=_int(data, "leaguePoints"),
            wins=_int(data, "wins"),
            losses=_int(data, "losses"),
            hot_streak=bool(data.get("hotStreak", False)),
            veteran=bool(data.get("veteran", False)),
            fresh_blood=bool(data.get("freshBlood", False)),
            inactive=bool(data.get("inactive", False)),
            mini_series=MiniSeries(
                target=_int(series, "target"),
                wins=_int(series, "wins"),
                losses=_int(series, "losses"),
                progress=series.get("progress", ""),
            ) if isinstance(series, dict) else None,
        )

    @property
    def win_rate(self) -> Optional[int]:
        return win_rate(self.wins, self.losses)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "queueType": self.queue_type,
            "tier": self.tier,
            "rank": self.rank,
            "leaguePoints": self.league_points,
            "wins": self.wins,
            "losses": self.losses,
            "winRate": self.win_rate,
            "hotStreak": self.hot_streak,
        }
        if self.mini_series is not None:
            out["miniSeries"] = self.mini_series.to_dict()
        return out


@dataclass(frozen=True)
class AggregateResult:
    account: Account
    profile: Profile
    solo_duo: Optional[RankedEntry]
    flex: Optional[RankedEntry]
    profile_source: str
    ranked_source: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "account": self.account.to_dict(),
            "profile": self.profile.to_dict(),
            "rankedStats": {
                "soloDuo": self.solo_duo.to_dict() if self.solo_duo else None,
                "flex": self.flex.to_dict() if self.flex else None,
            },
            "platform": {
                "profileSource": self.profile_source,
                "rankedSource": self.ranked_source,
            },
        }
