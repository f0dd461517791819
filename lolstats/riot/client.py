# riot/client.py

import asyncio
import logging
import math
from collections import deque
from typing import Any, Dict, List, Optional
from urllib.parse import quote
import time

import aiohttp

from lolstats.riot.errors import (
    InvalidApiKeyError,
    NotFoundError,
    RateLimitError,
    RiotError,
    UpstreamError,
)
from lolstats.riot.models import Account, Profile, RankedEntry
from lolstats.riot.platforms import Platform, Region, platform_base_url, regional_base_url

log = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER = 60

# Messages des statuts "connus" ; le reste tombe dans le cas générique
_STATUS_MESSAGES: Dict[int, str] = {
    400: "Bad request: Invalid parameters",
    403: "Forbidden: API key does not have permission",
    500: "Internal server error",
    502: "Bad gateway",
    503: "Service unavailable",
    504: "Gateway timeout",
}


def _retry_after(headers: Any) -> int:
    raw = headers.get("Retry-After") if headers else None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return DEFAULT_RETRY_AFTER


def error_for_status(status: int, headers: Any = None) -> RiotError:
    """Translate a non-2xx upstream status into the matching RiotError."""
    if status == 401:
        return InvalidApiKeyError()
    if status == 404:
        return NotFoundError("Player not found")
    if status == 429:
        return RateLimitError(_retry_after(headers))
    message = _STATUS_MESSAGES.get(status, f"API request failed with status {status}")
    return UpstreamError(message, status)


class RiotClient:
    """Async Riot API client: account-v1, summoner-v4 and league-v4, no retries."""

    def __init__(
        self,
        api_key: str,
        timeout: float = 10,
        quota_max: int = 100,
        quota_window: int = 120,
    ):
        if not api_key:
            raise ValueError("API key is required")
        self.api_key = api_key
        self.timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None

        # Pour throttling : timestamps des dernières requêtes
        self._req_times: deque = deque()
        # Quota dev Riot : 100 reqs / 120 s (0 = pas de throttling)
        self._quota_window = quota_window
        self._quota_max = quota_max
        self._lock = asyncio.Lock()

    def __repr__(self) -> str:
        # jamais la clé dans un repr / log
        return f"RiotClient(timeout={self.timeout}, quota={self._quota_max}/{self._quota_window}s)"

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"X-Riot-Token": self.api_key},
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self._session

    async def close(self):
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _throttle(self) -> float:
        """
        Sliding-window pacing so we stay under the key's quota instead of eating 429s.

        Returns the seconds spent waiting for a slot. A slot further away than the
        call timeout is refused with RateLimitError rather than waited for.
        """
        if self._quota_max <= 0:
            return 0.0
        async with self._lock:
            now = time.time()

            # Purge des requêtes trop vieilles
            while self._req_times and self._req_times[0] <= now - self._quota_window:
                self._req_times.popleft()

            wait = 0.0
            if len(self._req_times) >= self._quota_max:
                # Le créneau se libère quand la plus vieille req sort de la fenêtre
                wait = self._quota_window - (now - self._req_times[0])
                if wait >= self.timeout:
                    log.warning(f"Local quota reached, next slot in {wait:.1f}s")
                    raise RateLimitError(math.ceil(wait))
                self._req_times.popleft()

            # on réserve le créneau tout de suite, l'attente se fait hors du verrou
            self._req_times.append(now + wait)

        if wait > 0:
            log.debug(f"Local quota reached, waiting {wait:.1f}s")
            await asyncio.sleep(wait)
        return wait

    async def _request(self, url: str) -> Any:
        """
        Make a single GET against the Riot API.

        Args:
            url: The full URL to request

        Returns:
            Decoded JSON body

        Raises:
            InvalidApiKeyError: 401
            NotFoundError: 404
            RateLimitError: 429 with the upstream Retry-After, or the local quota
                has no slot before the call timeout
            UpstreamError: any other failure, including timeouts and bad JSON
        """
        waited = await self._throttle()
        session = await self._get_session()
        log.debug(f"GET {url}")

        kwargs: Dict[str, Any] = {}
        if waited:
            # l'attente du quota est prise sur le timeout de l'appel
            kwargs["timeout"] = aiohttp.ClientTimeout(total=self.timeout - waited)

        try:
            async with session.get(url, **kwargs) as resp:
                if resp.status >= 400:
                    log.debug(f"{resp.status} from {url}")
                    raise error_for_status(resp.status, resp.headers)
                try:
                    return await resp.json()
                except (aiohttp.ContentTypeError, ValueError) as e:
                    raise UpstreamError("Malformed response from Riot API", 502) from e
        except asyncio.TimeoutError as e:
            raise UpstreamError(f"Riot API timed out after {self.timeout}s", 504) from e
        except aiohttp.ClientError as e:
            raise UpstreamError(f"Riot API unreachable: {e.__class__.__name__}", 503) from e

    async def resolve_account(self, game_name: str, tag_line: str, region: Region) -> Account:
        """
        Get account by Riot ID (game name + tag).
        Account-V1: GET /riot/account/v1/accounts/by-riot-id/{gameName}/{tagLine}
        Routed via region group (americas/europe/asia).
        """
        url = (
            f"{regional_base_url(region)}"
            f"/riot/account/v1/accounts/by-riot-id/{quote(game_name, safe='')}/{quote(tag_line, safe='')}"
        )
        return Account.from_api(await self._request(url))

    async def fetch_profile(self, puuid: str, platform: Platform) -> Profile:
        """Summoner-V4 by PUUID on one platform."""
        url = f"{platform_base_url(platform)}/lol/summoner/v4/summoners/by-puuid/{quote(puuid, safe='')}"
        return Profile.from_api(await self._request(url))

    async def fetch_ranked_entries(self, puuid: str, platform: Platform) -> List[RankedEntry]:
        """League-V4 entries by PUUID. An empty list just means unranked on that platform."""
        url = f"{platform_base_url(platform)}/lol/league/v4/entries/by-puuid/{quote(puuid, safe='')}"
        result = await self._request(url)
        if result is None:
            return []
        if not isinstance(result, list):
            raise UpstreamError("Malformed response from Riot API: expected a list", 502)
        return [RankedEntry.from_api(entry) for entry in result]
