"""Unit tests for Riot ID parsing and validation."""

import pytest

from lolstats.riot import riot_id
from lolstats.riot.errors import FormatError, InvalidInputError
from lolstats.riot.riot_id import RiotId


class TestIsValid:
    """Test the boolean validator."""

    @pytest.mark.parametrize("raw", ["Samir#2468", "Troublemaker#0525", "F#KR", "Faker#K", "Hide on bush#KR1"])
    def test_accepts_valid_ids(self, raw):
        assert riot_id.is_valid(raw) is True

    @pytest.mark.parametrize("raw", ["Faker", "Faker#", "#KR1", "Faker#KR1#Extra", "", "   #   ", "##"])
    def test_rejects_invalid_ids(self, raw):
        assert riot_id.is_valid(raw) is False

    @pytest.mark.parametrize("raw", [None, 42, ["Faker", "KR1"], b"Faker#KR1"])
    def test_rejects_non_strings(self, raw):
        assert riot_id.is_valid(raw) is False

    def test_decodes_percent_encoding(self):
        """The '#' is usually sent as %23 because browsers drop URL fragments."""
        assert riot_id.is_valid("Faker%23KR1") is True
        assert riot_id.is_valid("Faker%23KR1%23Extra") is False


class TestParse:
    """Test parsing into RiotId."""

    def test_parse_simple(self):
        assert riot_id.parse("Faker#KR1") == RiotId(game_name="Faker", tag_line="KR1")

    def test_parse_trims_whitespace(self):
        result = riot_id.parse("  Faker  #  KR1  ")
        assert result.game_name == "Faker"
        assert result.tag_line == "KR1"

    def test_parse_encoded(self):
        result = riot_id.parse("Hide%20on%20bush%23KR1")
        assert result == RiotId(game_name="Hide on bush", tag_line="KR1")

    def test_single_character_halves(self):
        assert riot_id.parse("F#K") == RiotId(game_name="F", tag_line="K")

    def test_str_round_trip(self):
        assert str(riot_id.parse(" Samir # 2468 ")) == "Samir#2468"

    @pytest.mark.parametrize("raw", ["InvalidFormat", "a#b#c", "", "Faker#   "])
    def test_parse_raises_format_error(self, raw):
        with pytest.raises(FormatError) as exc_info:
            riot_id.parse(raw)

        assert exc_info.value.raw == raw
        assert "Invalid Riot ID format" in str(exc_info.value)

    def test_format_error_is_invalid_input(self):
        with pytest.raises(InvalidInputError) as exc_info:
            riot_id.parse(None)
        assert exc_info.value.status_code == 400
