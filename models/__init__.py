"""
Core data models package for the Job Sequencer.

This package contains all data structures used throughout the system:
- Job: A unit-time job with a deadline and a profit
- Schedule: A sequence of jobs placed into time slots
- SequenceKPI: Key Performance Indicators for schedule evaluation
- Ok / InvalidInput: Results returned by the schedulers
- SequencingPolicy: Settings loaded from configuration
"""

__all__ = ['Job', 'Schedule', 'SlotAssignment', 'SequenceKPI', 'Ok', 'InvalidInput',
           'InvalidInputError', 'SequencingPolicy']
