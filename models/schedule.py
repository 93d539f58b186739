"""
Schedule Model - Represents job sequences, KPIs and sequencing results

This module defines the Schedule class for representing a sequence of jobs
placed into unit time slots, the SequenceKPI class for evaluating it, and the
result types returned by schedulers.

Key Features:
    - Slot-wise job assignments (slot 1 .. horizon)
    - KPI computation (profit, dropped jobs, slot utilization)
    - Feasibility validation
    - Ok / InvalidInput results instead of process-fatal errors
"""

from typing import List, Dict, Optional, Tuple, Any, Union
from dataclasses import dataclass, field
from models.job import Job


@dataclass(frozen=True)
class SlotAssignment:
    """
    Represents a job placed into a specific time slot.
    """
    job: Job
    slot: int  # 1-indexed time unit the job occupies

    def is_on_time(self) -> bool:
        """Check if the job finishes by its deadline."""
        return 1 <= self.slot <= self.job.deadline

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "slot": self.slot,
            "job_id": self.job.job_id,
            "deadline": self.job.deadline,
            "profit": self.job.profit,
            "on_time": self.is_on_time(),
        }


@dataclass
class SequenceKPI:
    """
    Key Performance Indicators for a job sequence.

    Higher profit and utilization are better.
    """

    total_profit: int = 0          # Sum of profits of scheduled jobs
    num_selected: int = 0          # Jobs that got a slot
    num_dropped: int = 0           # Jobs left out
    dropped_profit: int = 0        # Profit of jobs left out
    horizon: int = 0               # Max deadline = number of usable slots
    slot_utilization: float = 0.0  # % of horizon slots filled

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_profit": self.total_profit,
            "num_selected": self.num_selected,
            "num_dropped": self.num_dropped,
            "dropped_profit": self.dropped_profit,
            "horizon": self.horizon,
            "slot_utilization": round(self.slot_utilization, 2),
        }

    def __str__(self) -> str:
        return (f"KPI(Profit: {self.total_profit}, "
                f"Selected: {self.num_selected}, "
                f"Dropped: {self.num_dropped}, "
                f"Utilization: {self.slot_utilization:.1f}%)")


@dataclass
class Schedule:
    """
    Represents a complete job sequence.

    Assignments are kept in slot order, which is also ascending deadline
    order for schedules built by the sequencers in this project.
    """

    assignments: List[SlotAssignment] = field(default_factory=list)
    dropped: List[Job] = field(default_factory=list)

    # Calculated KPIs
    kpis: Optional[SequenceKPI] = None

    # Metadata
    created_by: str = "Greedy Sequencer"
    explanation: str = ""

    def add_assignment(self, assignment: SlotAssignment):
        """
        Add a slot assignment, keeping assignments ordered by slot.

        Args:
            assignment: SlotAssignment to add
        """
        self.assignments.append(assignment)
        self.assignments.sort(key=lambda a: a.slot)

    @property
    def job_ids(self) -> List[str]:
        """Job identifiers in slot order."""
        return [a.job.job_id for a in self.assignments]

    @property
    def total_profit(self) -> int:
        return sum(a.job.profit for a in self.assignments)

    def get_slot(self, slot: int) -> Optional[SlotAssignment]:
        """
        Get the assignment occupying a slot.

        Args:
            slot: 1-indexed slot number

        Returns:
            The assignment, or None if the slot is free
        """
        return next((a for a in self.assignments if a.slot == slot), None)

    def calculate_kpis(self, horizon: Optional[int] = None) -> SequenceKPI:
        """
        Calculate KPIs for this schedule.

        Args:
            horizon: Number of usable slots; defaults to the max deadline
                seen among assigned and dropped jobs

        Returns:
            SequenceKPI object with calculated metrics
        """
        if horizon is None:
            deadlines = [a.job.deadline for a in self.assignments] + [j.deadline for j in self.dropped]
            horizon = max(deadlines, default=0)

        kpi = SequenceKPI(
            total_profit=self.total_profit,
            num_selected=len(self.assignments),
            num_dropped=len(self.dropped),
            dropped_profit=sum(j.profit for j in self.dropped),
            horizon=horizon,
        )
        if horizon > 0:
            kpi.slot_utilization = (kpi.num_selected / horizon) * 100

        self.kpis = kpi
        return kpi

    def validate(self) -> Tuple[bool, List[str]]:
        """
        Check that the schedule is feasible.

        Returns:
            Tuple of (is_valid, list_of_violations)
        """
        violations = []
        seen_slots = set()

        for assignment in self.assignments:
            job = assignment.job
            if assignment.slot < 1:
                violations.append(f"Job {job.job_id} placed in slot {assignment.slot} (slots start at 1)")
            elif not assignment.is_on_time():
                violations.append(
                    f"Job {job.job_id} placed in slot {assignment.slot} "
                    f"after its deadline {job.deadline}"
                )

            if assignment.slot in seen_slots:
                violations.append(f"Slot {assignment.slot} holds more than one job")
            seen_slots.add(assignment.slot)

        return len(violations) == 0, violations

    def to_dict(self) -> Dict[str, Any]:
        """Convert schedule to dictionary."""
        return {
            "sequence": self.job_ids,
            "assignments": [a.to_dict() for a in self.assignments],
            "dropped": [j.to_dict() for j in self.dropped],
            "kpis": self.kpis.to_dict() if self.kpis else None,
            "created_by": self.created_by,
            "explanation": self.explanation,
        }

    def __str__(self) -> str:
        return (f"Schedule({', '.join(self.job_ids) or 'empty'}; "
                f"profit {self.total_profit})")


class InvalidInputError(ValueError):
    """Raised when a caller unwraps an InvalidInput result."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "invalid job input")


@dataclass(frozen=True)
class Ok:
    """Successful sequencing result."""
    schedule: Schedule

    is_ok = True

    @property
    def job_ids(self) -> List[str]:
        return self.schedule.job_ids

    def unwrap(self) -> List[str]:
        return self.job_ids


@dataclass(frozen=True)
class InvalidInput:
    """
    Sequencing refused because the input breaks the job contract.

    Carries every problem found, not only the first one.
    """
    errors: Tuple[str, ...]
    invalid_jobs: Tuple[Job, ...] = ()

    is_ok = False

    def unwrap(self) -> List[str]:
        raise InvalidInputError(list(self.errors))


SequencingResult = Union[Ok, InvalidInput]


# Example usage
if __name__ == "__main__":
    schedule = Schedule()
    schedule.add_assignment(SlotAssignment(Job("c", 2, 27), 2))
    schedule.add_assignment(SlotAssignment(Job("a", 2, 100), 1))
    schedule.add_assignment(SlotAssignment(Job("e", 3, 15), 3))
    schedule.dropped.extend([Job("b", 1, 19), Job("d", 1, 25)])

    print(schedule)
    print(f"\nKPIs: {schedule.calculate_kpis()}")

    is_valid, violations = schedule.validate()
    print(f"\nValid: {is_valid}")
    for v in violations:
        print(f"  - {v}")
