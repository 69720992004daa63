" generic fixtures "
import json
import logging
from pathlib import Path

import pytest

TESTS_DIR = Path(__file__).parent
SAMPLE_CONFIG_FILE = TESTS_DIR / "sample_config.toml"


def pytest_configure():
    "Runs once before all"
    from swaypad.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def test_logger():
    logger = logging.getLogger("swaypad.tests")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def sample_tree():
    "A fresh copy of a real-looking sway tree"
    return json.loads((TESTS_DIR / "sample_tree.json").read_text())


@pytest.fixture
def sample_config_file():
    return SAMPLE_CONFIG_FILE


@pytest.fixture
def no_sway(monkeypatch):
    "Runs without sway in the environment"
    monkeypatch.delenv("SWAYSOCK", raising=False)
    monkeypatch.delenv("I3SOCK", raising=False)


def make_window(name=None, app_id=None, cls=None, focused=False, kind="con", **extra):
    "Build a raw sway window node"
    node = {"type": kind, "name": name, "app_id": app_id, "focused": focused, "nodes": [], "floating_nodes": []}
    if cls is not None:
        node["window_properties"] = {"class": cls}
    node.update(extra)
    return node
