"""
Corpus loading: card spreadsheet → ordered list of Record values.

Supported sources:
- .xlsx: first worksheet, header row skipped (openpyxl)
- .csv: header row skipped
- .json: array of objects keyed by field name or wire name

Columns (spreadsheet / CSV), in order:
    Card Title | Card Images | Annual Fees | Purchase Interest Rate |
    Cash Interest Rate | Product Value Prop | Product Benefits |
    Bank Name | Card Link

Loading happens once at startup and any failure is fatal: there is no
partial-corpus fallback.
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Sequence, Union

from openpyxl import load_workbook

from .models import RECORD_FIELDS, WIRE_NAMES, Record

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".xlsx", ".csv", ".json"}


class CorpusLoadError(RuntimeError):
    """Corpus is missing, unreadable or empty"""


def cell_to_text(value: Any) -> str:
    """
    Normalise a spreadsheet cell to text.
    
    Examples:
        >>> cell_to_text(None)
        ''
        >>> cell_to_text(95)
        '95.0'
        >>> cell_to_text(True)
        'true'
        >>> cell_to_text("  Chase ")
        'Chase'
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(float(value))
    return str(value).strip()


def record_from_row(row: Sequence[Any]) -> Record:
    """Build a Record from a positional row, padding missing trailing cells"""
    cells = [cell_to_text(value) for value in row[:len(RECORD_FIELDS)]]
    cells += [""] * (len(RECORD_FIELDS) - len(cells))
    return Record(*cells)


def record_from_mapping(data: dict) -> Record:
    """Build a Record from a dict keyed by field names or wire names"""
    values = {}
    for field_name in RECORD_FIELDS:
        if field_name in data:
            values[field_name] = cell_to_text(data[field_name])
        else:
            values[field_name] = cell_to_text(data.get(WIRE_NAMES[field_name]))
    return Record(**values)


def load_records(path: Union[str, Path]) -> List[Record]:
    """
    Load the card corpus from disk.
    
    Args:
        path: Spreadsheet, CSV or JSON file
    
    Returns:
        Records in file order
    
    Raises:
        CorpusLoadError: File missing, format unsupported, content
            unreadable, or no records found
    """
    path = Path(path)
    if not path.is_file():
        raise CorpusLoadError(f"Corpus file not found: {path}")

    ext = path.suffix.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise CorpusLoadError(
            f"Unsupported corpus format '{ext}' for {path}. "
            f"Supported: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )

    try:
        if ext == ".xlsx":
            records = _load_xlsx(path)
        elif ext == ".csv":
            records = _load_csv(path)
        else:
            records = _load_json(path)
    except CorpusLoadError:
        raise
    except Exception as e:
        raise CorpusLoadError(f"Failed to read corpus file {path}: {e}") from e

    if not records:
        raise CorpusLoadError(f"Corpus file {path} contains no card records")

    logger.info(f"Loaded {len(records)} cards from {path}")
    return records


def _rows_to_records(rows: Iterable[Sequence[Any]]) -> List[Record]:
    records = []
    for row in rows:
        if all(cell_to_text(value) == "" for value in row):
            continue
        records.append(record_from_row(row))
    return records


def _load_xlsx(path: Path) -> List[Record]:
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        sheet = workbook.worksheets[0]
        return _rows_to_records(sheet.iter_rows(min_row=2, values_only=True))
    finally:
        workbook.close()


def _load_csv(path: Path) -> List[Record]:
    with open(path, newline="", encoding="utf-8-sig") as f:
        reader = csv.reader(f)
        next(reader, None)  # Header
        return _rows_to_records(reader)


def _load_json(path: Path) -> List[Record]:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise CorpusLoadError(f"JSON corpus {path} must be an array of card objects")

    records = []
    for position, item in enumerate(data):
        if not isinstance(item, dict):
            raise CorpusLoadError(f"JSON corpus {path}: entry {position} is not an object")
        records.append(record_from_mapping(item))
    return records
