from __future__ import annotations

import csv
import io
import json
from typing import Any

OUTPUT_FORMATS = ["json", "jsonl", "csv", "tsv", "table"]

_TABULAR_FORMATS = ("jsonl", "csv", "tsv", "table")


def _as_records(data: Any) -> list[Any] | None:
    """Return the list of records in a Gerrit response, or None if it is a single entity."""
    if isinstance(data, list):
        return data
    if not isinstance(data, dict) or not data:
        return None
    # GET projects/, GET groups/ and friends answer with a map keyed by name
    if all(isinstance(v, dict) for v in data.values()):
        return [{"id": name, **info} for name, info in data.items()]
    return None


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def _tabulate(records: list[Any]) -> tuple[list[str], list[list[str]]]:
    columns: list[str] = []
    for record in records:
        keys = record.keys() if isinstance(record, dict) else ["value"]
        columns.extend(k for k in keys if k not in columns)

    rows = []
    for record in records:
        if not isinstance(record, dict):
            record = {"value": record}
        rows.append([_cell(record.get(column)) for column in columns])
    return columns, rows


def _print_delimited(columns: list[str], rows: list[list[str]], delimiter: str) -> None:
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter=delimiter, lineterminator="\n")
    writer.writerow(columns)
    writer.writerows(rows)
    print(buf.getvalue(), end="")


def _print_markdown(columns: list[str], rows: list[list[str]]) -> None:
    widths = [max(len(column), *(len(row[i]) for row in rows)) for i, column in enumerate(columns)]

    def line(cells: list[str]) -> str:
        return "| " + " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)) + " |"

    print(line(columns))
    print("|" + "|".join("-" * (w + 2) for w in widths) + "|")
    for row in rows:
        print(line(row))


def print_data(data: Any, *, output_format: str = "json") -> None:
    """Print decoded response data in the requested format.

    Tabular formats fall back to indented JSON when the data is a single entity.
    """
    records = _as_records(data) if output_format in _TABULAR_FORMATS else None
    if records is None:
        print(json.dumps(data, indent=2))
        return

    if output_format == "jsonl":
        for record in records:
            print(json.dumps(record))
        return

    if not records:
        return
    columns, rows = _tabulate(records)
    if output_format == "table":
        _print_markdown(columns, rows)
    else:
        _print_delimited(columns, rows, "\t" if output_format == "tsv" else ",")
