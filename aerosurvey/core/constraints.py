"""
Pre-flight constraint interface.
A constraint inspects an assembled PathSegment; concrete checks live in survey.checks.
"""
from abc import ABC, abstractmethod
from typing import Tuple

from .types import PathSegment


class Constraint(ABC):
    """
    check(segment) -> (feasible, violation).
    """

    @abstractmethod
    def check(self, segment: PathSegment) -> Tuple[bool, float]:
        """
        Returns:
            feasible: True if the segment satisfies the constraint
            violation: 0 when feasible; otherwise how far past the limit, in the limit's unit
        """
        pass

    @property
    def name(self) -> str:
        """Key used in check reports."""
        return self.__class__.__name__
