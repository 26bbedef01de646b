"""
File helpers for the CLI: reading pasted roll text and writing review exports.

The extraction core never touches the filesystem; these helpers sit in
front of and behind it.
"""

from __future__ import annotations

import csv
import json
import sys
from pathlib import Path
from typing import Iterable, Optional, Sequence, TextIO, Union

from ..exceptions import ExportError, InputReadError
from ..models import ExtractionResult, VoterRecord
from .digits import digits_only

CSV_COLUMNS = [
    "serial_number",
    "voter_id",
    "name",
    "father_name",
    "mother_name",
    "occupation",
    "birth_date",
    "gender",
    "address",
    "strategy",
    "issues",
]


def read_text_file(path: Union[str, Path]) -> str:
    """Read a UTF-8 text file (a BOM, if present, is dropped)."""
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(f"Cannot read input: {e}", file_path=str(path)) from e


def read_input_text(paths: Sequence[Union[str, Path]], stdin: Optional[TextIO] = None) -> str:
    """
    Concatenate input files, or read stdin when no path (or "-") is given.
    """
    if not paths or list(paths) == ["-"]:
        return (stdin or sys.stdin).read()
    return "\n".join(read_text_file(p) for p in paths)


def read_id_list(path: Union[str, Path]) -> set[str]:
    """
    Read voter ids already held by the caller's store, one per line.

    Ids are normalized the same way extracted ids are.
    """
    ids = set()
    for line in read_text_file(path).splitlines():
        voter_id = digits_only(line)
        if voter_id:
            ids.add(voter_id)
    return ids


def _csv_row(record: VoterRecord) -> dict[str, str]:
    row = record.to_dict()
    row["issues"] = ";".join(row["issues"])
    return row


def write_records_csv(records: Iterable[VoterRecord], csv_path: Union[str, Path]) -> Path:
    """Write records for review in spreadsheet tools (UTF-8 with BOM)."""
    csv_path = Path(csv_path)
    records = list(records)
    try:
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        with open(csv_path, mode="w", newline="", encoding="utf-8-sig") as csvfile:
            writer = csv.DictWriter(csvfile, fieldnames=CSV_COLUMNS, extrasaction="ignore")
            writer.writeheader()
            for record in records:
                writer.writerow(_csv_row(record))
    except OSError as e:
        raise ExportError(f"Cannot write CSV: {e}", file_path=str(csv_path), export_format="csv") from e
    return csv_path


def write_result_json(result: ExtractionResult, json_path: Union[str, Path]) -> Path:
    """Write the full extraction result (records, status, stats)."""
    json_path = Path(json_path)
    try:
        json_path.parent.mkdir(parents=True, exist_ok=True)
        json_path.write_text(
            json.dumps(result.to_dict(), ensure_ascii=False, indent=2),
            encoding="utf-8"
        )
    except OSError as e:
        raise ExportError(f"Cannot write JSON: {e}", file_path=str(json_path), export_format="json") from e
    return json_path


def read_records_json(path: Union[str, Path]) -> list[VoterRecord]:
    """
    Read stored records for retro-repair.

    Accepts a list of record objects or an extraction result written by
    write_result_json.
    """
    path = Path(path)
    try:
        data = json.loads(read_text_file(path))
    except json.JSONDecodeError as e:
        raise InputReadError(f"Records file is not valid JSON: {e}", file_path=str(path)) from e

    if isinstance(data, dict):
        data = data.get("records", [])
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise InputReadError("Records file must hold a list of record objects", file_path=str(path))

    try:
        return [VoterRecord.from_dict(item) for item in data]
    except (TypeError, ValueError, AttributeError) as e:
        raise InputReadError(f"Invalid record: {e}", file_path=str(path)) from e
