"""
Pytest configuration and shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from doccheck.checker import DocChecker
from doccheck.config import reset_config
from doccheck.parser import Lexer


# =============================================================================
# ENVIRONMENT
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep user config files and DOCCHECK_* variables out of every test."""
    for var in ("DOCCHECK_CONFIG", "DOCCHECK_PRINT_TOKENS", "DOCCHECK_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


# =============================================================================
# PATH FIXTURES
# =============================================================================

@pytest.fixture
def fixtures_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def checker():
    return DocChecker()


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def tokenize(source: str) -> list:
    """Tokenize source text into a list of tokens."""
    return Lexer(source).tokenize_all()


def token_values(source: str) -> list:
    """Token values only, for compact assertions."""
    return [t.value for t in tokenize(source)]
