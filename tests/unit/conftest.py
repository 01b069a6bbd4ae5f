"""Unit test fixtures: corpus files on disk"""

import csv
import json

import pytest
from openpyxl import Workbook

from cardsearch.models import RECORD_FIELDS, WIRE_NAMES

HEADER = [
    "Card Title", "Card Images", "Annual Fees", "Purchase Interest Rate",
    "Cash Interest Rate", "Product Value Prop", "Product Benefits",
    "Bank Name", "Card Link",
]


def _rows(records):
    return [[getattr(record, name) for name in RECORD_FIELDS] for record in records]


@pytest.fixture
def xlsx_corpus(tmp_path, sample_records):
    """Spreadsheet with a header row followed by the sample cards"""
    path = tmp_path / "cards.xlsx"
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(HEADER)
    for row in _rows(sample_records):
        sheet.append(row)
    workbook.save(path)
    return path


@pytest.fixture
def csv_corpus(tmp_path, sample_records):
    path = tmp_path / "cards.csv"
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)
        writer.writerows(_rows(sample_records))
    return path


@pytest.fixture
def json_corpus(tmp_path, sample_records):
    """JSON array using the camelCase wire names"""
    path = tmp_path / "cards.json"
    data = [
        {WIRE_NAMES[name]: getattr(record, name) for name in RECORD_FIELDS}
        for record in sample_records
    ]
    path.write_text(json.dumps(data), encoding="utf-8")
    return path
