import sys
from pathlib import Path

import pytest

# Make 'src' importable when the package is not installed
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from hostevents import DispatchSettings  # noqa: E402


@pytest.fixture
def log_policy() -> DispatchSettings:
    """Settings that log callback failures instead of raising them."""
    return DispatchSettings(on_callback_error="log")
