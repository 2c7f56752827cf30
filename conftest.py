import os

import pytest

# Configuration read by nix8820 at call time; tests start from defaults
NIX8820_ENV_VARS = ("NIX8820_VARIANT", "NIX8820_LOG_LEVEL", "NIX8820_LOG_JSON")


@pytest.fixture(autouse=True)
def clean_nix8820_env(monkeypatch):
    """Keep the caller's NIX8820_* settings from changing test behavior."""
    for name in NIX8820_ENV_VARS:
        if name in os.environ:
            monkeypatch.delenv(name)
    yield
