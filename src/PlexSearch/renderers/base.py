"""Base classes for output writers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from PlexSearch.services.search import SearchOutcome


class OutputWriter(ABC):
    """Abstract base class for command output writers."""

    @abstractmethod
    def write_outcome(self, outcome: SearchOutcome) -> None:
        """Write the result of one search call."""

    @abstractmethod
    def finalize(self, action: str) -> None:
        """Finalize output (e.g., write accumulated results to file).

        Args:
            action: The CLI command name (e.g., 'smart').
        """


@dataclass(slots=True)
class MultiOutputWriter(OutputWriter):
    """Delegate output to multiple writers."""

    writers: Sequence[OutputWriter]

    def write_outcome(self, outcome: SearchOutcome) -> None:
        for writer in self.writers:
            writer.write_outcome(outcome)

    def finalize(self, action: str) -> None:
        for writer in self.writers:
            writer.finalize(action)
