"""
Scheduler package for the Job Sequencer.

- greedy_scheduler: greedy max-heap sequencing with deadlines
- cli: the job-sequencer command line entry point
"""

__all__ = ['greedy_scheduler', 'cli']
