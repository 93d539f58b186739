"""
Job Model - Represents a unit-time job with a deadline and a profit

This module defines the Job class which encapsulates everything the
sequencer needs to know about a job: its identifier, the latest slot it may
occupy, and the profit it earns when it is scheduled on time.

Key Attributes:
    - job_id: Opaque identifier (e.g., "a", "J001")
    - deadline: Latest 1-indexed time slot the job may occupy
    - profit: Profit earned only if the job runs at or before its deadline
"""

from typing import List, Dict, Any
from dataclasses import dataclass
import json
import numbers


def _as_int(value: Any, field_name: str, job_id: str) -> int:
    """Coerce CSV/YAML values such as "3" or 3.0 to int, rejecting anything else."""
    if isinstance(value, bool):
        raise ValueError(f"Job {job_id}: {field_name} must be an integer, got: {value!r}")
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise ValueError(f"Job {job_id}: {field_name} must be an integer, got: {value!r}")


@dataclass(frozen=True)
class Job:
    """
    Represents a single job competing for a time slot.

    Every job takes exactly one unit of time. Jobs are immutable so a
    scheduler can never change what the caller handed in.

    Example:
        >>> job = Job(job_id="a", deadline=2, profit=100)
    """

    job_id: str          # Unique job identifier (e.g., "a")
    deadline: int        # Latest slot (1-indexed) the job may run in
    profit: int          # Earned only when scheduled on time

    def __post_init__(self):
        """Validate field types after initialization."""
        if self.job_id is None or str(self.job_id).strip() == "":
            raise ValueError("Job ID must be a non-empty label")
        # Labels are always text (1 -> "1")
        object.__setattr__(self, "job_id", str(self.job_id))

        # Range checks (deadline >= 1) are the scheduler's call, not ours
        for field_name in ("deadline", "profit"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(
                    f"Job {self.job_id}: {field_name} must be an integer, got: {value!r}"
                )

    @property
    def has_valid_deadline(self) -> bool:
        """Check if the deadline points at a real slot (>= 1)."""
        return self.deadline >= 1

    def validation_errors(self) -> List[str]:
        """
        Describe why this job cannot be sequenced.

        Returns:
            List of human-readable problems, empty when the job is usable
        """
        errors = []
        if not self.has_valid_deadline:
            errors.append(
                f"Job {self.job_id} has deadline {self.deadline}; deadlines start at slot 1"
            )
        return errors

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert job to dictionary for JSON serialization.

        Returns:
            Dictionary representation of the job
        """
        return {
            "job_id": self.job_id,
            "deadline": self.deadline,
            "profit": self.profit,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Job':
        """
        Create a Job instance from a dictionary.

        Accepts the loose values produced by CSV and YAML readers
        ("3", 3.0) and normalizes them to int.

        Args:
            data: Dictionary containing job data

        Returns:
            Job instance
        """
        missing = [key for key in ("job_id", "deadline", "profit") if key not in data]
        if missing:
            raise ValueError(f"Job record {data!r} is missing fields: {', '.join(missing)}")

        job_id = str(data["job_id"]).strip()
        return cls(
            job_id=job_id,
            deadline=_as_int(data["deadline"], "deadline", job_id),
            profit=_as_int(data["profit"], "profit", job_id),
        )

    def __str__(self) -> str:
        """String representation for logging and debugging."""
        return f"Job({self.job_id}: due slot {self.deadline}, profit {self.profit})"


# Example usage
if __name__ == "__main__":
    job = Job(job_id="a", deadline=2, profit=100)
    print(job)
    print(f"Valid deadline? {job.has_valid_deadline}")

    job_dict = job.to_dict()
    print(f"\nAs dict: {json.dumps(job_dict, indent=2)}")

    reconstructed = Job.from_dict({"job_id": "a", "deadline": "2", "profit": "100"})
    print(f"\nReconstructed: {reconstructed}")
