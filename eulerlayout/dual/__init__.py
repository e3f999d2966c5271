"""Modified Euler dual used to route curves that circles cannot realize."""

from .med import MED, MEDCycle, MEDEdge, MEDVertex, trace_cycle, validate_cycle

__all__ = ["MED", "MEDCycle", "MEDEdge", "MEDVertex", "trace_cycle", "validate_cycle"]
