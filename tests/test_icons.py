"""Tests for the profile icon service (Data Dragon version fallback)."""

import aiohttp
import pytest
from unittest.mock import AsyncMock, MagicMock

from lolstats.cache import AggregationCache, TTLCache
from lolstats.riot.errors import InvalidInputError, NotFoundError
from lolstats.services import icons
from lolstats.services.icons import IconAsset, IconService, candidate_versions


def _response(status=200, payload=None, body=b"", headers=None):
    resp = MagicMock()
    resp.status = status
    resp.headers = headers or {"Content-Type": "image/png"}
    resp.json = AsyncMock(return_value=payload)
    resp.read = AsyncMock(return_value=body)
    if status >= 400:
        resp.raise_for_status = MagicMock(side_effect=aiohttp.ClientError(f"HTTP {status}"))
    else:
        resp.raise_for_status = MagicMock()
    resp.__aenter__ = AsyncMock(return_value=resp)
    resp.__aexit__ = AsyncMock(return_value=None)
    return resp


def _service(routes):
    """IconService whose session answers from `routes` (url → response), 404 otherwise."""
    session = MagicMock()
    session.closed = False
    session.get.side_effect = lambda url: routes.get(url, _response(404))
    service = IconService(AggregationCache(TTLCache()), pinned=("14.1.1", "13.24.1"))
    service._session = session
    return service


class TestCandidateVersions:

    def test_latest_first_then_pinned(self):
        assert candidate_versions("15.2.1", ("14.1.1", "13.24.1")) == ["15.2.1", "14.1.1", "13.24.1"]

    def test_no_latest(self):
        assert candidate_versions(None, ("14.1.1",)) == ["14.1.1"]

    def test_dedup_keeps_order(self):
        assert candidate_versions("14.1.1", ("14.1.1", "13.24.1")) == ["14.1.1", "13.24.1"]


@pytest.mark.asyncio
class TestIconService:

    async def test_uses_latest_version(self):
        service = _service({
            icons.VERSIONS_URL: _response(payload=["15.2.1", "15.1.1"]),
            icons.icon_url(29, "15.2.1"): _response(body=b"latest-png"),
        })

        asset = await service.get_icon(29)

        assert asset == IconAsset(data=b"latest-png", content_type="image/png")

    async def test_falls_back_to_pinned_versions(self):
        service = _service({
            icons.VERSIONS_URL: _response(payload=["15.2.1"]),
            icons.icon_url(29, "13.24.1"): _response(body=b"old-png"),
        })

        asset = await service.get_icon(29)

        assert asset.data == b"old-png"
        requested = [c.args[0] for c in service._session.get.call_args_list]
        assert requested == [
            icons.VERSIONS_URL,
            icons.icon_url(29, "15.2.1"),
            icons.icon_url(29, "14.1.1"),
            icons.icon_url(29, "13.24.1"),
        ]

    async def test_version_lookup_failure_goes_straight_to_pinned(self):
        service = _service({
            icons.VERSIONS_URL: _response(status=503),
            icons.icon_url(7, "14.1.1"): _response(body=b"pinned-png"),
        })

        asset = await service.get_icon(7)

        assert asset.data == b"pinned-png"
        assert service._latest is None

    async def test_cached_after_first_fetch(self):
        service = _service({
            icons.VERSIONS_URL: _response(payload=["14.1.1"]),
            icons.icon_url(29, "14.1.1"): _response(body=b"png"),
        })

        await service.get_icon(29)
        calls = service._session.get.call_count
        again = await service.get_icon(29)

        assert again.data == b"png"
        assert service._session.get.call_count == calls
        assert service.cache.get_icon(29) == again

    async def test_not_found_everywhere(self):
        service = _service({icons.VERSIONS_URL: _response(payload=["14.1.1"])})
        with pytest.raises(NotFoundError):
            await service.get_icon(999999)

    @pytest.mark.parametrize("bad", [-1, "29", 2.5, True])
    async def test_rejects_bad_ids(self, bad):
        service = _service({})
        with pytest.raises(InvalidInputError):
            await service.get_icon(bad)
        service._session.get.assert_not_called()

    async def test_no_riot_token_sent_to_cdn(self):
        service = IconService(AggregationCache(TTLCache()))
        session = await service._get_session()
        assert "X-Riot-Token" not in session.headers
        await service.close()
