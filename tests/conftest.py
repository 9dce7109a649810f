"""Shared fixtures: temporary bundle projects and clean settings."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from arbsync.config import get_settings

SETTINGS_ENV = [
    "DEEPL_API_KEY",
    "DEEPL_ENDPOINT",
    "TRANSLATION_BACKEND",
    "FAILURE_POLICY",
    "LOG_LEVEL",
]


def write_json(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Settings come from defaults only, and are re-read per test."""
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def make_project(tmp_path) -> Callable[..., Path]:
    """
    Build an index file plus bundle directory under tmp_path.

    Returns a factory taking the template contents, target bundles keyed by
    file code (`fr`, `en_us`), optional cache contents and extra index
    settings. The factory returns the index file path.
    """

    def _make(
        template: dict[str, Any],
        targets: dict[str, dict[str, Any]] | None = None,
        cache: dict[str, Any] | None = None,
        index_extra: dict[str, Any] | None = None,
    ) -> Path:
        arb_dir = tmp_path / "l10n"
        arb_dir.mkdir(exist_ok=True)

        index = {"arb-dir": "l10n", "template-arb-file": "app_en.arb"}
        index.update(index_extra or {})
        index_path = tmp_path / "l10n.yaml"
        index_path.write_text(yaml.safe_dump(index, sort_keys=False), encoding="utf-8")

        write_json(arb_dir / index["template-arb-file"], template)
        for code, contents in (targets or {}).items():
            write_json(arb_dir / f"app_{code}.arb", contents)
        if cache is not None:
            write_json(arb_dir / ".cache.json", cache)

        return index_path

    return _make
