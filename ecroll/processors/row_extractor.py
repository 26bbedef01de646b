"""
Tabular row extraction.

Rolls copied from the list layout come out one voter per line, columns
separated by tabs or wide spacing:

    ১  ১২৩৪৫৬৭৮৯  করিম উদ্দিন  রহিম উদ্দিন  জমিলা বেগম  ১২/০৫/১৯৮০

Columns: serial, voter id, name, father, mother, birth date (optional).
"""

from __future__ import annotations

import re

from ..models import VoterRecord
from .base import BaseExtractor
from .block_extractor import starts_with_label

HEADER_MARKERS: tuple[str, ...] = ("ক্রমিক নং",)

COLUMN_SPLIT_RE = re.compile(r"\s*\t\s*|\s{2,}")


def split_columns(line: str) -> list[str]:
    return [col for col in COLUMN_SPLIT_RE.split(line.strip()) if col]


def is_tabular_row(line: str, min_columns: int = 5) -> bool:
    """
    True when a line splits into enough columns to be a voter row.

    Lines whose columns open with field labels are labeled-layout text
    laid out side by side, not rows.
    """
    columns = split_columns(line)
    if len(columns) < min_columns:
        return False
    return not any(starts_with_label(col) for col in columns)


class TabularRowExtractor(BaseExtractor):
    """Primary strategy: one record per qualifying line."""

    name = "TabularRowExtractor"
    strategy = "tabular"

    def is_header(self, line: str) -> bool:
        repaired = self.repairer.repair(line)
        return any(marker in line or marker in repaired for marker in HEADER_MARKERS)

    def extract(self, text: str) -> list[VoterRecord]:
        records = []

        for line in text.splitlines():
            self.stats.lines_scanned += 1
            if not line.strip() or self.is_header(line):
                continue
            if not is_tabular_row(line, self.config.min_columns):
                continue

            columns = split_columns(line)
            # Pad for a configured minimum below the full column set
            columns += [""] * (6 - len(columns))
            self.stats.rows_matched += 1

            record = self.build_record(
                serial_number=columns[0],
                voter_id=columns[1],
                name=columns[2],
                father_name=columns[3],
                mother_name=columns[4],
                birth_date=columns[5],
            )
            if record is None:
                self.stats.rows_rejected += 1
                continue
            records.append(record)

        self.log_debug(
            "Tabular rows",
            matched=self.stats.rows_matched,
            emitted=len(records)
        )
        return records
