import pytest

import tincture


@pytest.fixture(scope="function", autouse=True)
def restore_default_level():
    """Tests may change the level of the shared default root; put it back."""
    original_level = tincture.style.level
    yield original_level
    tincture.style.level = original_level


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove environment variables that affect color detection."""
    for name in (
        "NO_COLOR",
        "FORCE_COLOR",
        "TERM",
        "COLORTERM",
        "TERM_PROGRAM",
        "TERM_PROGRAM_VERSION",
        "CI",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
