import pytest

from src.scheduler.config import reset_config
from src.scheduler.models import Room


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def lab_a() -> Room:
    return Room(id="lab-a", name="Lab A", capacity=20, branch_id="centro")


@pytest.fixture
def lab_b() -> Room:
    return Room(id="lab-b", name="Lab B", capacity=0, branch_id="centro")
