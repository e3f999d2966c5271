"""Options and result types of the diagram creator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Union

from ..concrete import EulerDiagram
from ..decomposition.labels import DEFAULT_AUX_CYCLE_LENGTH_CAP
from ..dual.med import DEFAULT_RING_CLEARANCE, DEFAULT_RING_SIDES

FailureKind = Literal["malformed-input", "invariant-violation", "infeasible"]


@dataclass
class CreatorOptions:
    """Tunable constants of the incremental construction."""

    base_radius: float = 300.0
    radius_reduction: float = 2.0
    embed_margin: float = 4000.0
    ring_sides: int = DEFAULT_RING_SIDES
    ring_clearance: float = DEFAULT_RING_CLEARANCE
    max_workers: Optional[int] = None
    aux_cycle_length_cap: int = DEFAULT_AUX_CYCLE_LENGTH_CAP

    def __post_init__(self) -> None:
        if self.base_radius <= 0:
            raise ValueError("base_radius must be positive")
        if self.radius_reduction < 1.0:
            raise ValueError("radius_reduction must be at least 1")
        if self.ring_sides < 3:
            raise ValueError("ring_sides must be at least 3")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be positive")


@dataclass
class DiagramOK:
    """Successful construction."""

    diagram: EulerDiagram


@dataclass
class DiagramFail:
    """Construction stopped; ``error`` is the exception that ended it."""

    kind: FailureKind
    message: str
    error: Exception


DiagramResult = Union[DiagramOK, DiagramFail]

__all__ = ["CreatorOptions", "DiagramFail", "DiagramOK", "DiagramResult", "FailureKind"]
