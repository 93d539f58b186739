"""
Greedy Scheduler - Max-profit job sequencing with deadlines

Every job takes one unit of time, at most one job runs per unit, and a job
only pays its profit when it finishes by its deadline. The scheduler picks
and orders the subset of jobs with the largest total profit.

Algorithm:
    1. Sort a copy of the jobs by ascending deadline
    2. Walk them from the largest deadline down. The slots between the
       current deadline and the previous one in sorted order are "fresh";
       the first job in sorted order opens slots 1..its deadline
    3. Push the current job onto a max-heap keyed by profit
    4. Fill the fresh slots with the most profitable jobs seen so far
       (jobs with later deadlines may also run in earlier slots)
    5. Order the chosen jobs by ascending deadline; the k-th job runs in slot k

Runs in O(n log n).
"""

import heapq
from collections import Counter
from typing import Iterable, List, Tuple

from models.job import Job
from models.schedule import Schedule, SlotAssignment, Ok, InvalidInput, SequencingResult
from utils.logger import get_logger

logger = get_logger(__name__)


class GreedyScheduler:
    """
    Greedy max-heap sequencer.

    Invalid input is reported as an InvalidInput result rather than raised.

    Example:
        >>> result = GreedyScheduler().schedule([Job("x", 1, 50), Job("y", 2, 60)])
        >>> result.job_ids
        ['x', 'y']
    """

    def __init__(self, reject_duplicate_ids: bool = False):
        """
        Initialize the scheduler.

        Args:
            reject_duplicate_ids: Refuse inputs where two jobs share an ID
        """
        self.name = "Greedy Max-Heap Sequencer"
        self.reject_duplicate_ids = reject_duplicate_ids

    def validate(self, jobs: List[Job]) -> InvalidInput:
        """
        Collect every contract violation in the input.

        Args:
            jobs: Jobs to check

        Returns:
            InvalidInput describing the problems (empty errors if none)
        """
        errors = []
        invalid_positions = set()

        for position, job in enumerate(jobs):
            job_errors = job.validation_errors()
            if job_errors:
                errors.extend(job_errors)
                invalid_positions.add(position)

        if self.reject_duplicate_ids:
            counts = Counter(job.job_id for job in jobs)
            duplicates = sorted(job_id for job_id, count in counts.items() if count > 1)
            for job_id in duplicates:
                errors.append(f"Job ID {job_id} is used by {counts[job_id]} jobs")
            invalid_positions.update(
                position for position, job in enumerate(jobs) if counts[job.job_id] > 1
            )

        invalid_jobs = tuple(jobs[position] for position in sorted(invalid_positions))
        return InvalidInput(errors=tuple(errors), invalid_jobs=invalid_jobs)

    def schedule(self, jobs: Iterable[Job]) -> SequencingResult:
        """
        Select and order the jobs that maximize total profit.

        Args:
            jobs: Jobs to sequence; never modified

        Returns:
            Ok with the schedule, or InvalidInput listing what is wrong
        """
        working = list(jobs)

        problems = self.validate(working)
        if problems.errors:
            logger.warning("Rejected input of %d jobs: %s", len(working), "; ".join(problems.errors))
            return problems

        # Stable sort keeps input order among equal deadlines
        ordered = sorted(working, key=lambda j: j.deadline)

        heap: List[Tuple[int, int, Job]] = []
        committed: List[Tuple[int, Job]] = []

        for index in range(len(ordered) - 1, -1, -1):
            job = ordered[index]

            if index == 0:
                slots_available = job.deadline
            else:
                slots_available = job.deadline - ordered[index - 1].deadline

            heapq.heappush(heap, (-job.profit, index, job))

            if slots_available > 0:
                logger.debug("Job %s opens %d slot(s) up to slot %d",
                             job.job_id, slots_available, job.deadline)

            while slots_available > 0 and heap:
                _, position, best = heapq.heappop(heap)
                slots_available -= 1
                committed.append((position, best))
                logger.debug("Committed job %s (profit %d)", best.job_id, best.profit)

        committed.sort(key=lambda item: item[1].deadline)
        chosen_positions = {position for position, _ in committed}

        schedule = Schedule(created_by=self.name)
        for slot, (_, job) in enumerate(committed, start=1):
            schedule.assignments.append(SlotAssignment(job=job, slot=slot))
        schedule.dropped = [job for position, job in enumerate(ordered)
                            if position not in chosen_positions]

        horizon = ordered[-1].deadline if ordered else 0
        kpis = schedule.calculate_kpis(horizon)
        schedule.explanation = self._explain(schedule)

        logger.info("Sequenced %d of %d jobs for profit %d",
                    kpis.num_selected, len(ordered), kpis.total_profit)
        return Ok(schedule)

    def _explain(self, schedule: Schedule) -> str:
        kpis = schedule.kpis
        lines = [f"{self.name.upper()}", ""]
        if not schedule.assignments:
            lines.append("No jobs to sequence.")
            return "\n".join(lines)

        for assignment in schedule.assignments:
            job = assignment.job
            lines.append(f"Slot {assignment.slot}: {job.job_id} "
                         f"(deadline {job.deadline}, profit {job.profit})")
        if schedule.dropped:
            lines.append("")
            lines.append("Dropped: " + ", ".join(j.job_id for j in schedule.dropped))
        lines.append("")
        lines.append(f"Total profit: {kpis.total_profit} "
                     f"({kpis.num_selected}/{kpis.horizon} slots used)")
        return "\n".join(lines)

    def __str__(self) -> str:
        return f"GreedyScheduler(reject_duplicate_ids={self.reject_duplicate_ids})"


def schedule(jobs: Iterable[Job], reject_duplicate_ids: bool = False) -> SequencingResult:
    """
    Sequence jobs with the greedy scheduler.

    Args:
        jobs: Jobs to sequence
        reject_duplicate_ids: Refuse inputs where two jobs share an ID

    Returns:
        Ok or InvalidInput
    """
    return GreedyScheduler(reject_duplicate_ids=reject_duplicate_ids).schedule(jobs)


def sequence_job_ids(jobs: Iterable[Job], reject_duplicate_ids: bool = False) -> List[str]:
    """
    Return the chosen job IDs in ascending deadline order.

    Raises:
        InvalidInputError: If the input breaks the job contract
    """
    return schedule(jobs, reject_duplicate_ids=reject_duplicate_ids).unwrap()


# Quick demo
if __name__ == "__main__":
    demo_jobs = [
        Job("a", 2, 100),
        Job("b", 1, 19),
        Job("c", 2, 27),
        Job("d", 1, 25),
        Job("e", 3, 15),
    ]
    result = GreedyScheduler().schedule(demo_jobs)
    print(result.schedule.explanation)
