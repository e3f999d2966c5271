"""Creator façade turning descriptions into Euler diagrams."""

from __future__ import annotations

import logging
from typing import Optional, Union

from ..abstract import Description
from ..concrete import EulerDiagram
from ..errors import DescriptionError, GeometricInfeasibility, InvariantViolation
from ..parser import parse_description
from .config import get_creator_options, set_creator_options
from .diagram_creator import EulerDiagramCreator, draw_into_zone
from .model import CreatorOptions, DiagramFail, DiagramOK, DiagramResult, FailureKind

logger = logging.getLogger(__name__)


def _coerce(description: Union[str, Description]) -> Description:
    if isinstance(description, Description):
        return description
    return parse_description(description)


def draw_euler_diagram(
    description: Union[str, Description],
    options: Optional[CreatorOptions] = None,
) -> EulerDiagram:
    """Draw ``description``; construction errors propagate."""

    parsed = _coerce(description)
    creator = EulerDiagramCreator(options)
    diagram = creator.draw_euler_diagram(parsed)
    logger.info(
        "Drew %r with %d curve(s) and %d shaded zone(s)",
        parsed,
        len(diagram.curves),
        len(diagram.shaded_zones),
    )
    return diagram


def create_diagram(
    description: Union[str, Description],
    options: Optional[CreatorOptions] = None,
) -> DiagramResult:
    """Draw ``description`` and report failures as :class:`DiagramFail`."""

    try:
        return DiagramOK(draw_euler_diagram(description, options))
    except DescriptionError as exc:
        logger.warning("Malformed description: %s", exc)
        return DiagramFail("malformed-input", str(exc), exc)
    except InvariantViolation as exc:
        logger.warning("Construction invariant violated: %s", exc)
        return DiagramFail("invariant-violation", str(exc), exc)
    except GeometricInfeasibility as exc:
        logger.warning("Construction infeasible: %s", exc)
        return DiagramFail("infeasible", str(exc), exc)


__all__ = [
    "CreatorOptions",
    "DiagramFail",
    "DiagramOK",
    "DiagramResult",
    "EulerDiagramCreator",
    "FailureKind",
    "create_diagram",
    "draw_euler_diagram",
    "draw_into_zone",
    "get_creator_options",
    "set_creator_options",
]
