import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import punchcard_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from punchcard_toolkit.core.encoding import get_encoder  # noqa: E402
from punchcard_toolkit.core.models import CardRecord, ColumnRange, Deck  # noqa: E402


# Common test fixtures
@pytest.fixture
def encoder():
    """Return the shared IBM 029 encoder."""
    return get_encoder()


@pytest.fixture
def fortran_deck() -> Deck:
    """Deck with the sequence field protected and three statements."""
    deck = Deck.new("fortran", "fortran", [ColumnRange(73, 80)])
    for text in ("      PROGRAM MAIN", "      X = 1", "      END"):
        deck.append(CardRecord.from_text(text))
    return deck


@pytest.fixture
def deck_file(tmp_path: Path, fortran_deck: Deck) -> Path:
    """Write ``fortran_deck`` to disk and return its path."""
    path = tmp_path / "prog.jsonl"
    fortran_deck.save(path)
    return path
