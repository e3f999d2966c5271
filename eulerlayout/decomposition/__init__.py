"""Component and label decomposition of abstract descriptions."""

from .components import (
    ComponentSplit,
    decompose_components,
    find_split,
    is_atomic,
    is_connected,
    partition2,
)
from .labels import (
    DecompositionStrategy,
    ICurvesStrategy,
    RecompositionStep,
    decompose,
    make_step,
)

__all__ = [
    "ComponentSplit",
    "DecompositionStrategy",
    "ICurvesStrategy",
    "RecompositionStep",
    "decompose",
    "decompose_components",
    "find_split",
    "is_atomic",
    "is_connected",
    "make_step",
    "partition2",
]
