from __future__ import annotations

import json

from infra.logging import get_logger
from services.errors import ParseError, UnsupportedFileTypeError
from services.models import Row

logger = get_logger(__name__)


def decode_upload(raw: bytes, preferred_encoding: str | None = None) -> str:
    """Decode an uploaded file to text.
    Encoding: preferred → utf-8 (BOM tolerant) → latin-1
    """
    encodings = [e for e in [preferred_encoding, "utf-8-sig", "latin-1"] if e]

    last_err = None
    for enc in encodings:
        try:
            return raw.decode(enc)
        except (UnicodeDecodeError, LookupError) as e:
            last_err = e
            continue

    raise ParseError(f"Could not decode file. Last error: {last_err}")


def parse_csv(text: str) -> list[Row]:
    """Minimal CSV splitter: newline, then comma; first line is the header.

    Quoted fields, embedded commas and escaped delimiters are not supported.
    Short lines get ``None`` for the missing cells, extra cells are dropped.
    """
    lines = [line for line in text.split("\n") if line.strip()]
    if not lines:
        raise ParseError("CSV has no header line")

    headers = [h.strip() for h in lines[0].split(",")]
    rows: list[Row] = []
    for line in lines[1:]:
        values = line.split(",")
        row: Row = {}
        for idx, header in enumerate(headers):
            row[header] = values[idx].strip() if idx < len(values) else None
        rows.append(row)
    return rows


def parse_json(text: str) -> list[Row]:
    """Parse a JSON document that holds an array of objects."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise ParseError(f"Expected a JSON array, got {type(data).__name__}")
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise ParseError(f"Element {i} is {type(item).__name__}, expected an object")
    return data


def load_dataset(filename: str, text: str) -> list[Row]:
    """Pick the parser from the file extension (case-insensitive)."""
    name = (filename or "").lower()
    if name.endswith(".json"):
        rows = parse_json(text)
    elif name.endswith(".csv"):
        rows = parse_csv(text)
    else:
        raise UnsupportedFileTypeError(f"Unsupported extension: {filename!r}")

    logger.debug("Parsed %s: %d rows", filename, len(rows))
    return rows
