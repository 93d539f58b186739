"""
Utility functions package for the Job Sequencer.

This package contains helper utilities:
- config_loader: Load and parse YAML/JSON configurations
- data_generator: Reference scenarios, random jobs, job file import/export
- baseline_scheduler: Slot-filling scheduler and exhaustive search for comparison
- logger: Logging setup
"""

__all__ = ['config_loader', 'data_generator', 'baseline_scheduler', 'logger']
