import pytest

from models.job import Job
from utils.data_generator import create_scenario


@pytest.fixture
def five_jobs():
    return create_scenario('five_jobs')['jobs']


@pytest.fixture
def four_jobs():
    return create_scenario('four_jobs')['jobs']


@pytest.fixture
def same_deadline_jobs():
    return [Job('p', 1, 10), Job('q', 1, 30), Job('r', 1, 20)]


@pytest.fixture(autouse=True)
def clear_sequencer_env(monkeypatch):
    monkeypatch.delenv('JOB_SEQUENCER_CONFIG', raising=False)
    monkeypatch.delenv('JOB_SEQUENCER_LOG_LEVEL', raising=False)
