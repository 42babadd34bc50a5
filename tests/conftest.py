"""Shared fixtures."""

import logging
import os

import platformdirs
import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler and level changes made by setup_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    factory = logging.getLogRecordFactory()
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.setLogRecordFactory(factory)


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Keep ConfigLoader away from real user config, cwd defaults and env vars."""
    monkeypatch.chdir(tmp_path)
    user_dir = tmp_path / "user-config"
    monkeypatch.setattr(
        platformdirs, "user_config_dir", lambda *args, **kwargs: str(user_dir)
    )
    for key in list(os.environ):
        if key.startswith("FUZZY_PATH_"):
            monkeypatch.delenv(key)
    return user_dir
