import os

import pytest

BACKEND_DIR = os.path.join(os.path.dirname(__file__), "..")
DATA_DIR = os.path.join(BACKEND_DIR, "data")
CONFIG_PATH = os.path.join(BACKEND_DIR, "config", "tournament-config.json")

LOADED_AT = 1700000000000


@pytest.fixture
def data_dir():
    return DATA_DIR


@pytest.fixture
def config_path():
    return CONFIG_PATH


@pytest.fixture
def loaded_at():
    return LOADED_AT
