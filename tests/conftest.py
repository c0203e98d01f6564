"""
Pytest configuration file.

Puts the repo root on sys.path so the flat modules (server, routes, ...) import,
and provides an app wired to a temporary data directory.
"""
import sys
import threading
from pathlib import Path

import pytest

repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from mirror import MirrorSink  # noqa: E402
from server import create_app  # noqa: E402


class RecordingMirror(MirrorSink):
    """Collects publish calls; optionally fails every call."""

    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail
        self.called = threading.Event()

    def publish(self, path, message):
        self.calls.append((Path(path).name, message))
        self.called.set()
        if self.fail:
            raise RuntimeError("remote unavailable")


@pytest.fixture
def settings(tmp_path):
    return {
        "BASE": tmp_path,
        "DATA_DIR": tmp_path / "data",
        "STATIC_DIR": tmp_path / "static",
        "RESOURCES_CONFIG": None,
        "SEED_SAMPLE_DATA": False,
        "PORT": 0,
        "HOST": "127.0.0.1",
    }


@pytest.fixture
def mirror():
    return RecordingMirror()


@pytest.fixture
def app(settings, mirror):
    app = create_app(settings, mirror=mirror)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def data_dir(settings):
    return settings["DATA_DIR"]


@pytest.fixture
def failing_mirror():
    return RecordingMirror(fail=True)
