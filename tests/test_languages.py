"""
Tests for language identifiers.
"""

import pytest

from arbsync.core.errors import InvalidLanguageError
from arbsync.i18n.languages import LANGUAGE_NAMES, Lang, get_language_name, parse_language


class TestParse:
    @pytest.mark.parametrize("code,expected", [
        ("fr", Lang.FR),
        ("FR", Lang.FR),
        ("en-us", Lang.EN_US),
        ("en_us", Lang.EN_US),
        ("PT_BR", Lang.PT_BR),
    ])
    def test_accepted_forms(self, code, expected):
        assert Lang.parse(code) is expected

    def test_unknown_code(self):
        with pytest.raises(InvalidLanguageError) as exc:
            Lang.parse("xx")
        assert exc.value.code == "xx"

    def test_parse_language_returns_none(self):
        assert parse_language("klingon") is None
        assert parse_language("de") is Lang.DE


class TestFormatting:
    def test_file_code(self):
        assert Lang.EN_US.file_code() == "en_us"
        assert Lang.FR.file_code() == "fr"

    def test_str_is_code(self):
        assert str(Lang.PT_BR) == "PT-BR"
        assert f"{Lang.DE}" == "DE"

    def test_every_language_has_a_name(self):
        assert set(LANGUAGE_NAMES) == set(Lang)

    def test_get_language_name(self):
        assert get_language_name(Lang.FR) == "French"
        assert get_language_name("en-gb") == "English (British)"
