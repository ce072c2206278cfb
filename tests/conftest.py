import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging replaces root handlers; drop them after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def mangohud_home(tmp_path, monkeypatch):
    """An empty XDG config home with MangoHud's variables cleared."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.setenv("MANGOVERLAY_SETTINGS", str(tmp_path / "mangoverlay.yaml"))
    monkeypatch.delenv("MANGOHUD_CONFIGFILE", raising=False)
    monkeypatch.delenv("MANGOHUD_CONFIG", raising=False)
    return tmp_path
