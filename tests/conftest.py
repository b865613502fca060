import pytest


@pytest.fixture(autouse=True)
def plain_console(monkeypatch):
    # Captured console output must not carry colour codes.
    for name in ("FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE"):
        monkeypatch.delenv(name, raising=False)
