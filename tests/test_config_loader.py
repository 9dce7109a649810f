"""
Tests for index files and the synchronization context.
"""

import pytest

from arbsync.config_loader import IndexDocument, Intl
from arbsync.core.errors import (
    ArbDirNotDefinedError,
    IndexParseError,
    NoFileError,
    NotDirectoryError,
    NotFileError,
    NoYamlDocumentsError,
    TemplateArbFileNotDefinedError,
)
from arbsync.i18n.languages import Lang
from tests.conftest import write_json


# =============================================================================
# Index document
# =============================================================================


class TestIndexDocument:
    def test_required_keys(self, tmp_path):
        path = tmp_path / "l10n.yaml"
        path.write_text("arb-dir: l10n\ntemplate-arb-file: app_en.arb\n", encoding="utf-8")

        doc = IndexDocument.load(path)

        assert doc.arb_dir == "l10n"
        assert doc.template_arb_file == "app_en.arb"
        assert doc.name_prefix is None
        assert doc.overrides_dir is None

    def test_missing_arb_dir(self, tmp_path):
        path = tmp_path / "l10n.yaml"
        path.write_text("template-arb-file: app_en.arb\n", encoding="utf-8")
        with pytest.raises(ArbDirNotDefinedError):
            IndexDocument.load(path)

    def test_missing_template(self, tmp_path):
        path = tmp_path / "l10n.yaml"
        path.write_text("arb-dir: l10n\n", encoding="utf-8")
        with pytest.raises(TemplateArbFileNotDefinedError):
            IndexDocument.load(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "l10n.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(NoYamlDocumentsError):
            IndexDocument.load(path)

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "l10n.yaml"
        path.write_text("arb-dir: [l10n\n", encoding="utf-8")
        with pytest.raises(IndexParseError):
            IndexDocument.load(path)

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "l10n.yaml"
        path.write_bytes("arb-dir: café\ntemplate-arb-file: app_en.arb\n".encode("latin-1"))
        with pytest.raises(IndexParseError):
            IndexDocument.load(path)

    def test_only_first_document_is_used(self, tmp_path):
        path = tmp_path / "l10n.yaml"
        path.write_text(
            "arb-dir: first\ntemplate-arb-file: app_en.arb\n---\narb-dir: second\n",
            encoding="utf-8",
        )
        assert IndexDocument.load(path).arb_dir == "first"


# =============================================================================
# Context
# =============================================================================


class TestIntl:
    def test_missing_index(self, tmp_path):
        with pytest.raises(NoFileError):
            Intl(tmp_path / "missing.yaml")

    def test_index_is_a_directory(self, tmp_path):
        with pytest.raises(NotFileError):
            Intl(tmp_path)

    def test_missing_arb_dir(self, tmp_path):
        path = tmp_path / "l10n.yaml"
        path.write_text("arb-dir: nowhere\ntemplate-arb-file: app_en.arb\n", encoding="utf-8")
        with pytest.raises(NotDirectoryError):
            Intl(path)

    def test_defaults(self, make_project, tmp_path):
        intl = Intl(make_project({"title": "Title"}))

        assert intl.name_prefix == "app"
        assert intl.template_language is Lang.EN
        assert intl.arb_directory() == tmp_path / "l10n"
        assert intl.cache_path() == tmp_path / "l10n" / ".cache.json"
        assert intl.overrides_directory() is None

    def test_prefix_in_index_wins(self, make_project):
        index = make_project(
            {"title": "Title"},
            index_extra={"name-prefix": "strings", "template-arb-file": "strings_en.arb"},
        )
        intl = Intl(index, name_prefix="other")

        assert intl.name_prefix == "strings"
        assert intl.format_file_name(Lang.PT_BR) == "strings_pt_br.arb"

    def test_prefix_argument(self, make_project):
        intl = Intl(make_project({"title": "Title"}), name_prefix="app")
        assert intl.format_file_name(Lang.EN_US) == "app_en_us.arb"

    def test_parse_file_name(self, make_project):
        intl = Intl(make_project({"title": "Title"}))

        assert intl.parse_file_name("app_fr.arb") is Lang.FR
        assert intl.parse_file_name("app_en_gb.arb") is Lang.EN_GB
        assert intl.parse_file_name("app_fr.json") is None
        assert intl.parse_file_name("other_fr.arb") is None
        assert intl.parse_file_name("app_xx.arb") is None

    def test_list_translated(self, make_project, tmp_path):
        index = make_project({"title": "Title"}, targets={"fr": {}, "de": {}})
        (tmp_path / "l10n" / "notes.txt").write_text("", encoding="utf-8")

        found = Intl(index).list_translated()

        assert list(found) == [Lang.DE, Lang.EN, Lang.FR]
        assert found[Lang.FR] == tmp_path / "l10n" / "app_fr.arb"

    def test_missing_template(self, make_project, tmp_path):
        intl = Intl(make_project({"title": "Title"}))
        (tmp_path / "l10n" / "app_en.arb").unlink()

        with pytest.raises(NoFileError):
            intl.template_content()

    def test_missing_target_is_empty(self, make_project):
        intl = Intl(make_project({"title": "Title"}))

        with pytest.raises(NoFileError):
            intl.load(Lang.FR)
        assert intl.load_or_default(Lang.FR).is_empty()

    def test_reads_existing_cache(self, make_project):
        intl = Intl(make_project({"title": "Title"}, cache={"FR": {"title": "Title"}}))
        assert intl.cache.get(Lang.FR).get("title") == "Title"

    def test_load_overrides(self, make_project, tmp_path):
        index = make_project({"title": "Title"}, index_extra={"overrides-dir": "overrides"})
        overrides = tmp_path / "overrides"
        overrides.mkdir()
        write_json(overrides / "app_fr.arb", {"title": "Titre"})
        write_json(overrides / "app_de.arb", {"title": "Titel"})

        intl = Intl(index)
        assert intl.overrides_directory() == overrides

        loaded = intl.load_overrides(intl.overrides_directory(), [Lang.FR])
        assert list(loaded) == [Lang.FR]
        assert loaded[Lang.FR].get("title") == "Titre"
