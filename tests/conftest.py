# tests/conftest.py
import os, sys, pathlib
import pytest

# Add ./src to sys.path so `import mancala...` works in tests
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC  = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Keep the defaults deterministic regardless of the developer's shell
os.environ.setdefault("MANCALA_STONES_PER_PIT", "7")
os.environ.setdefault("MANCALA_MAX_DEPTH", "8")

@pytest.fixture(scope="session")
def app():
    from mancala.api.app import create_app
    app = create_app()
    app.config.update(TESTING=True)
    return app

@pytest.fixture(scope="session")
def client(app):
    return app.test_client()

@pytest.fixture
def make_state():
    """State from sparse {index: count}; every other counter is 0."""
    def _make(counts, player=1, game_over=False):
        pits = [0] * 16
        for i, n in counts.items():
            pits[i] = n
        return {"pits": pits, "current_player": player, "game_over": game_over}
    return _make
