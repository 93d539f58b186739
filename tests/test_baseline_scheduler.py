import pytest

from models.job import Job
from utils.baseline_scheduler import (
    BaselineScheduler,
    MAX_EXHAUSTIVE_JOBS,
    exhaustive_max_profit,
    is_feasible,
)
from utils.data_generator import generate_random_jobs


def test_baseline_matches_known_answer(five_jobs):
    schedule, explanation = BaselineScheduler().schedule(five_jobs)

    assert schedule.total_profit == 142
    assert set(schedule.job_ids) == {'a', 'c', 'e'}
    assert schedule.validate() == (True, [])
    assert 'Jobs assigned: 3 / 5' in explanation


def test_baseline_places_jobs_in_latest_free_slot():
    schedule, _ = BaselineScheduler().schedule([Job('a', 4, 20), Job('c', 1, 40)])

    assert [(a.job.job_id, a.slot) for a in schedule.assignments] == [('c', 1), ('a', 4)]


def test_baseline_skips_invalid_deadlines():
    schedule, explanation = BaselineScheduler().schedule([Job('bad', 0, 99), Job('ok', 1, 1)])

    assert schedule.job_ids == ['ok']
    assert 'Jobs skipped (deadline < 1): 1' in explanation


def test_baseline_empty_input():
    schedule, _ = BaselineScheduler().schedule([])

    assert schedule.job_ids == []
    assert schedule.kpis.total_profit == 0


def test_is_feasible():
    assert is_feasible([Job('a', 2, 1), Job('b', 1, 1)])
    assert not is_feasible([Job('a', 1, 1), Job('b', 1, 1)])
    assert is_feasible([])


def test_exhaustive_optimum(four_jobs):
    assert exhaustive_max_profit(four_jobs) == (140, ['x', 'y', 'w'])
    assert exhaustive_max_profit([]) == (0, [])


def test_exhaustive_refuses_large_inputs():
    jobs = generate_random_jobs(MAX_EXHAUSTIVE_JOBS + 1, seed=1)

    with pytest.raises(ValueError):
        exhaustive_max_profit(jobs)


@pytest.mark.parametrize('seed', range(10))
def test_baseline_reaches_exhaustive_optimum(seed):
    jobs = generate_random_jobs(9, max_deadline=4, seed=seed)

    schedule, _ = BaselineScheduler().schedule(jobs)

    assert schedule.total_profit == exhaustive_max_profit(jobs)[0]
