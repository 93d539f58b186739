"""
Baseline Scheduler - Textbook slot-filling implementation

This provides a baseline for comparison against the greedy max-heap
sequencer, plus an exhaustive search that gives the true optimum on small
inputs.

Purpose: Show that the greedy sequencer reaches the best achievable profit.
"""

from itertools import combinations
from typing import List, Optional, Tuple

from models.job import Job
from models.schedule import Schedule, SlotAssignment

# Subsets grow as 2^n; beyond this the exhaustive search is not worth running
MAX_EXHAUSTIVE_JOBS = 16


class BaselineScheduler:
    """
    Classic profit-first slot-filling scheduler.

    This scheduler:
    - Sorts jobs by profit, highest first
    - Puts each job into the latest free slot at or before its deadline
    - Skips a job when every such slot is taken

    Runs in O(n * horizon). Used as a baseline to cross-check the
    greedy max-heap sequencer.
    """

    def __init__(self):
        """Initialize baseline scheduler."""
        self.name = "Baseline Slot-Filling Scheduler"

    def schedule(self, jobs: List[Job]) -> Tuple[Schedule, str]:
        """
        Create a slot-filling schedule.

        Algorithm:
        1. Sort jobs by profit descending (input order among ties)
        2. For each job, scan slots from its deadline down to 1
        3. Take the first free slot, or skip the job

        Args:
            jobs: List of jobs to schedule

        Returns:
            Tuple of (Schedule, explanation)
        """
        schedule = Schedule(created_by=self.name)

        usable = [j for j in jobs if j.has_valid_deadline]
        jobs_invalid = len(jobs) - len(usable)

        horizon = max((j.deadline for j in usable), default=0)
        slots: List[Optional[Job]] = [None] * (horizon + 1)  # index 0 unused

        for job in sorted(usable, key=lambda j: -j.profit):
            for slot in range(job.deadline, 0, -1):
                if slots[slot] is None:
                    slots[slot] = job
                    break
            else:
                schedule.dropped.append(job)

        for slot in range(1, horizon + 1):
            if slots[slot] is not None:
                schedule.assignments.append(SlotAssignment(job=slots[slot], slot=slot))

        kpis = schedule.calculate_kpis(horizon)

        explanation = f"""BASELINE SLOT-FILLING SCHEDULER

Algorithm Used:
- Highest profit first
- Latest free slot at or before the deadline

Results:
- Jobs assigned: {kpis.num_selected} / {len(jobs)}
- Jobs dropped: {kpis.num_dropped}
- Jobs skipped (deadline < 1): {jobs_invalid}
- Total profit: {kpis.total_profit}
"""
        schedule.explanation = explanation
        return schedule, explanation

    def __str__(self) -> str:
        return "BaselineScheduler(algorithm=slot-filling)"


def is_feasible(jobs: List[Job]) -> bool:
    """
    Check if every job can run by its deadline, one job per slot.

    Placing the jobs in deadline order is optimal, so the k-th job
    (1-based) must have deadline >= k.
    """
    ordered = sorted(jobs, key=lambda j: j.deadline)
    return all(job.deadline >= slot for slot, job in enumerate(ordered, start=1))


def exhaustive_max_profit(jobs: List[Job]) -> Tuple[int, List[str]]:
    """
    Find the maximum achievable profit by trying every subset.

    Args:
        jobs: Jobs with positive deadlines

    Returns:
        Tuple of (best_profit, job_ids in ascending deadline order)

    Raises:
        ValueError: If there are more than MAX_EXHAUSTIVE_JOBS jobs
    """
    if len(jobs) > MAX_EXHAUSTIVE_JOBS:
        raise ValueError(
            f"Exhaustive search supports at most {MAX_EXHAUSTIVE_JOBS} jobs, got {len(jobs)}"
        )

    horizon = max((j.deadline for j in jobs), default=0)
    best_profit = 0
    best_subset: Tuple[Job, ...] = ()

    for size in range(1, min(len(jobs), horizon) + 1):
        for subset in combinations(jobs, size):
            profit = sum(j.profit for j in subset)
            if profit > best_profit and is_feasible(list(subset)):
                best_profit = profit
                best_subset = subset

    ordered = sorted(best_subset, key=lambda j: j.deadline)
    return best_profit, [j.job_id for j in ordered]


# Quick test
if __name__ == "__main__":
    from utils.data_generator import generate_random_jobs

    print("Testing Baseline Slot-Filling Scheduler...")

    test_jobs = generate_random_jobs(10, max_deadline=5, seed=7)

    baseline = BaselineScheduler()
    schedule, explanation = baseline.schedule(test_jobs)

    print("\n" + explanation)
    print(f"Sequence: {schedule.job_ids}")
    print(f"Exhaustive optimum: {exhaustive_max_profit(test_jobs)}")
