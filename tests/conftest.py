import pytest

from cfxresolver.config import Settings

from .helpers import DIRECTORY


@pytest.fixture
def settings() -> Settings:
    return Settings(directory_url=DIRECTORY, lookup_timeout=2.0, probe_timeout=0.5)
