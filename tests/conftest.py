"""Shared pytest configuration and card fixtures"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to path for cardsearch imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Add tests directory so test modules can import the shared card records
tests_dir = Path(__file__).parent
sys.path.insert(0, str(tests_dir))

# Keep session logs out of the working tree (main.py configures logging on import)
os.environ.setdefault("LOG_FILE", str(Path(tempfile.gettempdir()) / "cardsearch-tests" / "cardsearch.log"))

from cardsearch.index import build_index
from cards import CASH_BACK, PREMIUM_TRAVEL, STUDENT, TRAVEL_REWARDS


@pytest.fixture
def sample_records():
    """Four cards in corpus order"""
    return [TRAVEL_REWARDS, CASH_BACK, PREMIUM_TRAVEL, STUDENT]


@pytest.fixture
def sample_index(sample_records):
    """Index built from sample_records"""
    return build_index(sample_records)
