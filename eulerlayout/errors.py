"""Exception hierarchy shared by the layout pipeline."""

from __future__ import annotations


class DescriptionError(ValueError):
    """Raised when an abstract description or one of its zones is malformed."""


class DescriptionSyntaxError(DescriptionError):
    """Malformed textual description; carries the offending position."""

    def __init__(self, message: str, line: int = 1, col: int = 1) -> None:
        super().__init__(message)
        self.line = line
        self.col = col


class DiagramConstructionError(RuntimeError):
    """Base class for failures while turning a description into a drawing."""


class InvariantViolation(DiagramConstructionError):
    """A structural assumption of the construction does not hold."""


class GeometricInfeasibility(DiagramConstructionError):
    """No curve placement satisfies the requested zone split."""


__all__ = [
    "DescriptionError",
    "DescriptionSyntaxError",
    "DiagramConstructionError",
    "GeometricInfeasibility",
    "InvariantViolation",
]
