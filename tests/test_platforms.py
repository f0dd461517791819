"""Tests for the region/platform tables."""

import pytest

from lolstats.riot import platforms as pf
from lolstats.riot.errors import ConfigurationError, InvalidRegionError
from lolstats.riot.platforms import Platform, Region
from lolstats.riot.riot_id import RiotId


class TestTables:
    """The tables are the single source of truth for routing."""

    def test_every_platform_in_exactly_one_region(self):
        listed = [p for ps in pf.REGION_PLATFORMS.values() for p in ps]
        assert len(listed) == len(set(listed)) == len(Platform)

    def test_default_platform_belongs_to_region(self):
        for region in Region:
            assert pf.default_platform(region) in pf.platforms_for(region)

    def test_region_for_platform_is_inverse(self):
        for region in Region:
            for platform in pf.platforms_for(region):
                assert pf.region_for_platform(platform) is region

    def test_platforms_for_keeps_order(self):
        assert pf.platforms_for("americas") == (Platform.NA1, Platform.BR1, Platform.LA1, Platform.LA2)
        assert pf.platforms_for(Region.EUROPE)[0] is Platform.EUW1

    def test_unknown_region_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            pf.platforms_for("sea")
        with pytest.raises(ConfigurationError):
            pf.default_platform("mars")

    def test_base_urls(self):
        assert pf.regional_base_url(Region.ASIA) == "https://asia.api.riotgames.com"
        assert pf.platform_base_url(Platform.EUW1) == "https://euw1.api.riotgames.com"
        with pytest.raises(ConfigurationError):
            pf.platform_base_url("xx9")


class TestParseRegion:

    @pytest.mark.parametrize("raw,expected", [
        ("americas", Region.AMERICAS),
        ("  Europe ", Region.EUROPE),
        ("ASIA", Region.ASIA),
        (Region.ASIA, Region.ASIA),
    ])
    def test_valid(self, raw, expected):
        assert pf.parse_region(raw) is expected

    @pytest.mark.parametrize("raw", ["sea", "", "euw1", None, 3])
    def test_invalid(self, raw):
        with pytest.raises(InvalidRegionError) as exc_info:
            pf.parse_region(raw)
        assert exc_info.value.received == raw
        assert exc_info.value.status_code == 400


class TestPlatformHint:

    @pytest.mark.parametrize("tag,expected", [
        ("NA1", Platform.NA1),
        ("euw", Platform.EUW1),
        ("KR1", Platform.KR),
        ("oce", Platform.OC1),
        ("2468", None),
    ])
    def test_hint_from_tag(self, tag, expected):
        assert pf.platform_hint(RiotId("Someone", tag)) == expected

    def test_hint_from_raw_string(self):
        assert pf.platform_hint("Faker#kr") is Platform.KR
        assert pf.platform_hint("Faker") is None
