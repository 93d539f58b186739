"""
Sequencing Policy - Operational settings for the job sequencer

Holds the knobs that the YAML configuration controls: how duplicate job
identifiers are treated and how logging is set up.
"""

from typing import Dict, Any
from dataclasses import dataclass

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class SequencingPolicy:
    """
    Settings shared by the CLI, the dashboard and the schedulers.

    Example:
        >>> policy = SequencingPolicy(reject_duplicate_ids=True)
    """

    reject_duplicate_ids: bool = False   # Refuse inputs that reuse a job ID
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    def __post_init__(self):
        """Validate policy values after initialization."""
        self.log_level = str(self.log_level).upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Log level must be one of {', '.join(VALID_LOG_LEVELS)}, got: {self.log_level}"
            )
        if not isinstance(self.reject_duplicate_ids, bool):
            raise ValueError(
                f"reject_duplicate_ids must be true or false, got: {self.reject_duplicate_ids!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert policy to the nested layout used by the config file."""
        return {
            "sequencing": {
                "reject_duplicate_ids": self.reject_duplicate_ids,
            },
            "logging": {
                "level": self.log_level,
                "format": self.log_format,
            },
        }
