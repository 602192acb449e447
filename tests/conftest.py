import pytest

from lispy.interpreter import Interpreter
from lispy.types.numeric import Arithmetic

# Every test runs against the default configuration: settings leaking in from
# the developer's shell (LISPY_INT_BITS, LISPY_OVERFLOW, ...) are cleared.
LISPY_ENV_VARS = (
    "LISPY_INT_BITS",
    "LISPY_OVERFLOW",
    "LISPY_MAX_DEPTH",
    "LISPY_HISTORY_FILE",
    "LISPY_LOG_LEVEL",
    "LISPY_COLOR_OPTIONS",
)


@pytest.fixture(autouse=True)
def _clean_lispy_env(monkeypatch):
    for var in LISPY_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def arithmetic():
    """64-bit integers, overflow is an error."""
    return Arithmetic()


@pytest.fixture
def interp(arithmetic):
    return Interpreter(arithmetic=arithmetic)


@pytest.fixture
def run(interp):
    """Evaluate source text and return the printed result."""
    def _run(source: str) -> str:
        return str(interp.eval(source))
    return _run
