import pytest

from textintel.engine import TextIntelligenceEngine


@pytest.fixture(scope="session")
def nlp_engine():
    """One initialized engine shared by the whole run; training happens once."""
    eng = TextIntelligenceEngine()
    eng.initialize()
    return eng
