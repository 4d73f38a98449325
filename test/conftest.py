import pytest

from changebench.components.config_parser import ConsumerParams
from changebench.model import FullDocumentMode, Scenario

from .fakes import FakeClock


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def consumer_params() -> ConsumerParams:
    return ConsumerParams(
        {
            "seeding_timeout": 1.0,
            "idle_timeout": 0.1,
            "measured_operations": ["update"],
            "queue_size": 100,
            "max_concurrent_batches": 2,
        }
    )


@pytest.fixture
def default_scenario() -> Scenario:
    return Scenario(FullDocumentMode.Default, 3)


@pytest.fixture
def embedded_scenario() -> Scenario:
    return Scenario(FullDocumentMode.UpdateLookup, 3)
