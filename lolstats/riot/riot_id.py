# riot/riot_id.py – Parsing / validation des Riot ID ("gameName#tagLine")

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import unquote

from lolstats.riot.errors import FormatError

DELIMITER = "#"


@dataclass(frozen=True)
class RiotId:
    """A parsed Riot ID. Both halves are trimmed and non-empty."""
    game_name: str
    tag_line: str

    def __str__(self) -> str:
        return f"{self.game_name}{DELIMITER}{self.tag_line}"


def _decode(raw: str) -> str:
    # "Faker%23KR1" arrive tel quel quand le client encode le '#'
    return unquote(raw)


def is_valid(raw: object) -> bool:
    """
    Check that `raw` is a usable Riot ID.

    Percent-encoding is decoded first, then exactly one '#' must be present
    and both sides must be non-empty once whitespace is stripped. Never raises.
    """
    if not raw or not isinstance(raw, str):
        return False

    decoded = _decode(raw)
    if decoded.count(DELIMITER) != 1:
        return False

    game_name, tag_line = decoded.split(DELIMITER)
    return bool(game_name.strip()) and bool(tag_line.strip())


def parse(raw: object) -> RiotId:
    """
    Parse a raw Riot ID into a RiotId.

    Raises:
        FormatError: when is_valid(raw) is False; the error keeps `raw`.
    """
    if not is_valid(raw):
        raise FormatError(raw)

    game_name, tag_line = _decode(raw).split(DELIMITER)
    return RiotId(game_name=game_name.strip(), tag_line=tag_line.strip())
