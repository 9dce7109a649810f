"""
Side-by-side comparison of a template and a translated bundle.

Produces a CSV document reviewers can fill in with corrections; the
corrections are then turned into override bundles by hand.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from typing import TextIO

from arbsync.core.bundle import Bundle, Entry
from arbsync.i18n.languages import Lang


@dataclass
class CompareRow:
    id: str
    source: str
    target: str
    correction: str = ""


def compare_bundles(template: Bundle, translated: Bundle) -> list[CompareRow]:
    """One row per translatable template key present in the translation."""
    rows: list[CompareRow] = []
    for key, value in template.entries():
        if not Entry(key, value).is_translatable():
            continue
        target = translated.lookup(key)
        if target is None:
            continue
        rows.append(CompareRow(id=key, source=value, target=target.as_str() or ""))
    return rows


def write_csv(rows: list[CompareRow], out: TextIO, source: Lang, target: Lang) -> None:
    """Write comparison rows with a header naming both languages."""
    writer = csv.writer(out)
    writer.writerow(["Identifier", f"Source ({source})", f"Target ({target})", "Correction"])
    for row in rows:
        writer.writerow([row.id, row.source, row.target, row.correction])
