"""
Test Data Generator - Create job scenarios and read/write job files

This module provides:
- Reference scenarios with known answers
- Randomly generated jobs
- Job import from CSV, YAML and JSON files
- Job and schedule export to CSV
"""

import io
import random
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from models.job import Job
from models.schedule import Schedule
from utils.config_loader import load_json, load_yaml
from utils.logger import get_logger

logger = get_logger(__name__)

JOB_COLUMNS = ['job_id', 'deadline', 'profit']


# Scenarios with known answers: (job_id, deadline, profit) rows
REFERENCE_SCENARIOS: Dict[str, Dict[str, Any]] = {
    'textbook': {
        'description': 'Three jobs compete for slot 1; one long-deadline job',
        'jobs': [('a', 4, 20), ('b', 1, 10), ('c', 1, 40), ('d', 1, 30)],
        'expected_sequence': ['c', 'a'],
        'expected_profit': 60,
    },
    'five_jobs': {
        'description': 'Two slot-2 jobs outbid both slot-1 jobs',
        'jobs': [('a', 2, 100), ('b', 1, 19), ('c', 2, 27), ('d', 1, 25), ('e', 3, 15)],
        'expected_sequence': ['a', 'c', 'e'],
        'expected_profit': 142,
    },
    'four_jobs': {
        'description': 'One job per deadline wins; z is dropped',
        'jobs': [('x', 1, 50), ('y', 2, 60), ('z', 2, 20), ('w', 3, 30)],
        'expected_sequence': ['x', 'y', 'w'],
        'expected_profit': 140,
    },
    'same_deadline': {
        'description': 'All jobs due in slot 1; only the most profitable runs',
        'jobs': [('p', 1, 10), ('q', 1, 30), ('r', 1, 20)],
        'expected_sequence': ['q'],
        'expected_profit': 30,
    },
}


def create_scenario(name: str) -> Dict[str, Any]:
    """
    Build a reference scenario.

    Args:
        name: Key of REFERENCE_SCENARIOS

    Returns:
        Dictionary with name, description, jobs, expected_sequence
        and expected_profit
    """
    if name not in REFERENCE_SCENARIOS:
        raise ValueError(
            f"Unknown scenario '{name}'. Choose from: {', '.join(sorted(REFERENCE_SCENARIOS))}"
        )

    scenario = REFERENCE_SCENARIOS[name]
    return {
        'name': name,
        'description': scenario['description'],
        'jobs': [Job(job_id, deadline, profit) for job_id, deadline, profit in scenario['jobs']],
        'expected_sequence': list(scenario['expected_sequence']),
        'expected_profit': scenario['expected_profit'],
    }


def generate_random_jobs(
    num_jobs: int,
    max_deadline: int = 5,
    profit_range: Tuple[int, int] = (1, 100),
    seed: Optional[int] = None
) -> List[Job]:
    """
    Generate random jobs for testing.

    Args:
        num_jobs: Number of jobs to generate
        max_deadline: Deadlines are drawn from 1..max_deadline
        profit_range: Inclusive (low, high) profit bounds
        seed: Seed for reproducible output

    Returns:
        List of Job objects with IDs J001, J002, ...
    """
    if num_jobs < 0:
        raise ValueError(f"Number of jobs must be >= 0, got: {num_jobs}")
    if max_deadline < 1:
        raise ValueError(f"Max deadline must be >= 1, got: {max_deadline}")

    rnd = random.Random(seed)
    low, high = profit_range

    return [
        Job(
            job_id=f"J{i+1:03d}",
            deadline=rnd.randint(1, max_deadline),
            profit=rnd.randint(low, high)
        )
        for i in range(num_jobs)
    ]


def jobs_from_records(records: List[Dict[str, Any]]) -> List[Job]:
    """Build jobs from dict records, naming the bad row on failure."""
    jobs = []
    for row_number, record in enumerate(records, start=1):
        if not isinstance(record, dict):
            raise ValueError(f"Job record {row_number} must be a mapping, got: {record!r}")
        try:
            jobs.append(Job.from_dict(record))
        except ValueError as e:
            raise ValueError(f"Job record {row_number}: {e}") from e
    return jobs


def jobs_from_dataframe(df: pd.DataFrame) -> List[Job]:
    """
    Parse jobs from a DataFrame with job_id, deadline and profit columns.

    Args:
        df: DataFrame, typically read from CSV

    Returns:
        List of Job objects
    """
    missing = [c for c in JOB_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Job table is missing columns: {', '.join(missing)}")
    return jobs_from_records(df[JOB_COLUMNS].to_dict(orient='records'))


def load_jobs(file_path: str) -> List[Job]:
    """
    Load jobs from a CSV, YAML or JSON file.

    YAML and JSON files hold either a list of job mappings or a mapping
    with a "jobs" list.

    Args:
        file_path: Path to the job file

    Returns:
        List of Job objects
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Job file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == '.csv':
        jobs = jobs_from_dataframe(pd.read_csv(path, dtype={'job_id': str}, keep_default_na=False))
    elif suffix in ('.yaml', '.yml', '.json'):
        data = load_json(str(path)) if suffix == '.json' else load_yaml(str(path))
        if isinstance(data, dict):
            data = data.get('jobs', [])
        if not isinstance(data, list):
            raise ValueError(f"Job file {path} must contain a list of jobs")
        jobs = jobs_from_records(data)
    else:
        raise ValueError(f"Unsupported job file type '{suffix}' (use .csv, .yaml or .json)")

    logger.info("Loaded %d jobs from %s", len(jobs), path)
    return jobs


def read_uploaded_jobs(uploaded_file: Any, loaded_file_id: Optional[str]) -> Optional[List[Job]]:
    """
    Parse an uploaded CSV unless it is the upload already loaded.

    Args:
        uploaded_file: File-like object with a file_id (Streamlit upload)
        loaded_file_id: file_id of the last upload that was loaded

    Returns:
        Parsed jobs, or None when there is nothing new to load
    """
    if uploaded_file is None or uploaded_file.file_id == loaded_file_id:
        return None
    return jobs_from_dataframe(pd.read_csv(uploaded_file, dtype={'job_id': str}, keep_default_na=False))


def export_jobs_to_csv(jobs: List[Job], output_path: str):
    """
    Export jobs to CSV file.

    Args:
        jobs: List of Job objects
        output_path: Path to save CSV
    """
    df = pd.DataFrame([job.to_dict() for job in jobs], columns=JOB_COLUMNS)
    df.to_csv(output_path, index=False)
    logger.info("Exported %d jobs to %s", len(jobs), output_path)


def schedule_to_dataframe(schedule: Schedule) -> pd.DataFrame:
    """One row per slot assignment."""
    return pd.DataFrame(
        [a.to_dict() for a in schedule.assignments],
        columns=['slot', 'job_id', 'deadline', 'profit', 'on_time']
    )


def export_schedule_to_csv(schedule: Schedule) -> str:
    """Export schedule to CSV text."""
    buffer = io.StringIO()
    schedule_to_dataframe(schedule).to_csv(buffer, index=False)
    return buffer.getvalue()


# Example usage and CLI
if __name__ == "__main__":
    print("=" * 60)
    print("TEST DATA GENERATOR")
    print("=" * 60)

    output_dir = Path(__file__).parent.parent / 'data'
    output_dir.mkdir(exist_ok=True)

    for scenario_name in REFERENCE_SCENARIOS:
        scenario = create_scenario(scenario_name)
        print(f"\n{scenario['name']}: {scenario['description']}")
        print(f"Expected: {', '.join(scenario['expected_sequence'])} "
              f"(profit {scenario['expected_profit']})")
        export_jobs_to_csv(scenario['jobs'], str(output_dir / f"{scenario_name}.csv"))

    print(f"\n✓ All scenarios exported to {output_dir}")
