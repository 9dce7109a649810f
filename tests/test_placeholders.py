"""
Tests for placeholder extraction and protection.
"""

import logging

import pytest

from arbsync.core.bundle import Bundle
from arbsync.core.errors import AlreadyPrefixedError, PlaceholderNotDefinedError
from arbsync.core.placeholders import Placeholders, protect, restore


# =============================================================================
# Extraction
# =============================================================================


class TestExtraction:
    def test_declared_names_in_order(self):
        bundle = Bundle({
            "range": "{from} to {to}",
            "@range": {"placeholders": {"from": {"type": "int"}, "to": {"type": "int"}}},
        })
        assert bundle.placeholders("range").to_list() == ["from", "to"]

    def test_no_metadata(self):
        assert Bundle({"title": "Title"}).placeholders("title") is None

    def test_metadata_without_placeholders(self):
        bundle = Bundle({"title": "Title", "@title": {"description": "Heading"}})
        assert bundle.placeholders("title") is None

    def test_prefixed_key_is_an_error(self):
        bundle = Bundle({"title": "Title", "@title": {}})
        with pytest.raises(AlreadyPrefixedError) as exc:
            bundle.placeholders("@title")
        assert exc.value.key == "@title"

    def test_malformed_metadata_is_ignored_with_warning(self, caplog):
        bundle = Bundle({"title": "Title", "@title": "not an object"})
        with caplog.at_level(logging.WARNING):
            assert bundle.placeholders("title") is None
        assert "@title" in caplog.text

    def test_malformed_placeholders_member(self):
        bundle = Bundle({"title": "Title", "@title": {"placeholders": ["name"]}})
        assert bundle.placeholders("title") is None


# =============================================================================
# Verification
# =============================================================================


class TestVerify:
    def test_all_present(self):
        Placeholders(("name", "count")).verify("{name} has {count} items")

    def test_missing_placeholder(self):
        with pytest.raises(PlaceholderNotDefinedError) as exc:
            Placeholders(("name", "count")).verify("{name} has items")
        assert exc.value.name == "count"
        assert exc.value.source == "{name} has items"

    def test_name_without_braces_does_not_count(self):
        with pytest.raises(PlaceholderNotDefinedError):
            Placeholders(("name",)).verify("Hello name")


# =============================================================================
# Protect / restore
# =============================================================================


class TestProtect:
    def test_protect(self):
        assert protect("Hello {name}", ["name"]) == "Hello <ph>name</ph>"

    def test_protect_first_occurrence_only(self):
        assert protect("{name} and {name}", ["name"]) == "<ph>name</ph> and {name}"

    def test_restore(self):
        assert restore("Bonjour <ph>name</ph>", ["name"]) == "Bonjour {name}"

    def test_restore_reordered_markers(self):
        text = "<ph>to</ph> depuis <ph>from</ph>"
        assert restore(text, ["from", "to"]) == "{to} depuis {from}"

    def test_round_trip_through_identity_backend(self):
        protected = protect("Hello {name}", ["name"])
        assert "{name}" not in protected
        assert "{name}" in restore(protected, ["name"])

    def test_no_names_is_identity(self):
        assert protect("Plain {text}", []) == "Plain {text}"
        assert restore("Plain <ph>text</ph>", []) == "Plain <ph>text</ph>"
