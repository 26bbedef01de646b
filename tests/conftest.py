from pathlib import Path

import pytest

from ecroll.config import reset_config

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def fixtures_dir():
    return FIXTURES
