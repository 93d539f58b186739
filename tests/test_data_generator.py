import io

import pandas as pd
import pytest

from models.job import Job
from scheduler.greedy_scheduler import schedule
from utils.data_generator import (
    create_scenario,
    export_jobs_to_csv,
    export_schedule_to_csv,
    generate_random_jobs,
    jobs_from_dataframe,
    load_jobs,
    read_uploaded_jobs,
)


def test_create_scenario_unknown_name():
    with pytest.raises(ValueError, match='Unknown scenario'):
        create_scenario('nope')


def test_random_jobs_are_reproducible_and_in_range():
    jobs = generate_random_jobs(20, max_deadline=4, profit_range=(5, 9), seed=42)

    assert jobs == generate_random_jobs(20, max_deadline=4, profit_range=(5, 9), seed=42)
    assert [j.job_id for j in jobs[:2]] == ['J001', 'J002']
    assert all(1 <= j.deadline <= 4 for j in jobs)
    assert all(5 <= j.profit <= 9 for j in jobs)


@pytest.mark.parametrize('kwargs', [{'num_jobs': -1}, {'num_jobs': 3, 'max_deadline': 0}])
def test_random_jobs_reject_bad_arguments(kwargs):
    with pytest.raises(ValueError):
        generate_random_jobs(**kwargs)


def test_csv_export_then_load(tmp_path, four_jobs):
    path = tmp_path / 'jobs.csv'

    export_jobs_to_csv(four_jobs, str(path))

    assert load_jobs(str(path)) == four_jobs


def test_csv_keeps_numeric_looking_ids_as_text(tmp_path):
    path = tmp_path / 'jobs.csv'
    path.write_text('job_id,deadline,profit\n007,1,5\n')

    assert load_jobs(str(path)) == [Job('007', 1, 5)]


def test_yaml_job_file_with_jobs_key(tmp_path):
    path = tmp_path / 'jobs.yaml'
    path.write_text(
        'jobs:\n'
        '  - {job_id: a, deadline: 2, profit: 100}\n'
        '  - {job_id: b, deadline: 1, profit: 19}\n'
    )

    assert load_jobs(str(path)) == [Job('a', 2, 100), Job('b', 1, 19)]


def test_json_job_file_as_list(tmp_path):
    path = tmp_path / 'jobs.json'
    path.write_text('[{"job_id": "x", "deadline": 1, "profit": 50}]')

    assert load_jobs(str(path)) == [Job('x', 1, 50)]


def test_bad_row_is_named(tmp_path):
    path = tmp_path / 'jobs.yaml'
    path.write_text('- {job_id: a, deadline: 1, profit: 1}\n- {job_id: b, deadline: soon, profit: 1}\n')

    with pytest.raises(ValueError, match='Job record 2'):
        load_jobs(str(path))


def test_missing_columns():
    with pytest.raises(ValueError, match='profit'):
        jobs_from_dataframe(pd.DataFrame({'job_id': ['a'], 'deadline': [1]}))


def test_unsupported_and_missing_files(tmp_path):
    path = tmp_path / 'jobs.txt'
    path.write_text('a 1 1')

    with pytest.raises(ValueError, match='Unsupported'):
        load_jobs(str(path))
    with pytest.raises(FileNotFoundError):
        load_jobs(str(tmp_path / 'missing.csv'))


def test_export_schedule_to_csv(four_jobs):
    text = export_schedule_to_csv(schedule(four_jobs).schedule)

    lines = text.strip().splitlines()
    assert lines[0] == 'slot,job_id,deadline,profit,on_time'
    assert lines[1] == '1,x,1,50,True'
    assert len(lines) == 4


def test_blank_id_row_is_rejected(tmp_path):
    path = tmp_path / 'jobs.csv'
    path.write_text('job_id,deadline,profit\n,1,5\n')

    with pytest.raises(ValueError, match='non-empty label'):
        load_jobs(str(path))


class _Upload(io.BytesIO):
    def __init__(self, content: bytes, file_id: str):
        super().__init__(content)
        self.file_id = file_id


def test_uploaded_jobs_load_once_per_file():
    upload = _Upload(b'job_id,deadline,profit\na,1,5\n', 'upload-1')

    assert read_uploaded_jobs(upload, None) == [Job('a', 1, 5)]
    assert read_uploaded_jobs(upload, 'upload-1') is None
    assert read_uploaded_jobs(None, 'upload-1') is None


def test_uploaded_blank_id_is_rejected():
    upload = _Upload(b'job_id,deadline,profit\n,1,5\n', 'upload-2')

    with pytest.raises(ValueError, match='non-empty label'):
        read_uploaded_jobs(upload, None)
