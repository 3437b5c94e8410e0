import pytest

from config import AppConfig
from helpers import FakeBackend
from session import Session


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def session(backend: FakeBackend) -> Session:
    cfg = AppConfig(seed=7)
    return Session(cfg, backend_factory=lambda _cfg: backend)
