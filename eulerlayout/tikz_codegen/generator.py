"""TikZ renderer for finished Euler diagrams."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Tuple

from shapely.geometry import MultiPolygon, Polygon

from .utils import latex_escape, latex_escape_keep_math
from ..concrete import EulerDiagram
from ..curves import CircleCurve, ClosePath, CubicTo, LineTo, MoveTo, PathCurve
from ..geometry.polygons import BBox, Point2D

TARGET_WIDTH_CM = 8.0
SHADE_COLOR = "black!15"

standalone_tpl = r"""\documentclass[border=2pt]{standalone}
\usepackage[utf8]{inputenc}
\usepackage[T1]{fontenc}
\usepackage{adjustbox}
\usepackage{tikz}
\tikzset{
  %% global sizes (scale-aware; override per diagram if needed)
  eu/line width/.store in=\euLW,     eu/line width=0.8pt,
  curve/.style={line width=\euLW},
  shaded/.style={fill=%s, draw=none},
  curvelabel/.style={font=\footnotesize, inner sep=1pt},
}
\begin{document}
\begin{minipage}[t]{\linewidth}
%s

\begin{adjustbox}{max width=\linewidth, max totalheight=\textheight, keepaspectratio}
%s
\end{adjustbox}
\end{minipage}
\end{document}
"""


@dataclass
class _Frame:
    """Maps diagram coordinates (y down) to TikZ centimetres (y up)."""

    min_x: float
    max_y: float
    unit: float

    def point(self, p: Point2D) -> Tuple[float, float]:
        return ((p[0] - self.min_x) * self.unit, (self.max_y - p[1]) * self.unit)

    def length(self, value: float) -> float:
        return value * self.unit


@dataclass
class RenderPlan:
    shaded: List[List[List[Point2D]]] = field(default_factory=list)
    curves: List[object] = field(default_factory=list)
    labels: List[Tuple[str, Point2D]] = field(default_factory=list)


def generate_tikz_document(
    diagram: EulerDiagram,
    labels: Optional[Mapping[str, Point2D]] = None,
    *,
    caption: Optional[str] = None,
) -> str:
    """Render a standalone document around :func:`generate_tikz_code`."""

    header = ""
    if caption:
        header = "\\noindent " + latex_escape_keep_math(caption.strip()) + "\\par\\vspace{4pt}\n"
    tikz_code = generate_tikz_code(diagram, labels)
    return standalone_tpl % (SHADE_COLOR, header, tikz_code)


def generate_tikz_code(
    diagram: EulerDiagram,
    labels: Optional[Mapping[str, Point2D]] = None,
) -> str:
    if not isinstance(diagram, EulerDiagram):
        raise TypeError("diagram must be an instance of EulerDiagram")
    plan = _build_render_plan(diagram, labels or {})
    frame = _frame_for(diagram.bbox(), labels or {})
    return _emit_tikz_picture(plan, frame)


# ---------------------------------------------------------------------------
# Render plan construction
# ---------------------------------------------------------------------------

def _polygon_rings(polygon: Polygon) -> List[List[Point2D]]:
    rings = [list(polygon.exterior.coords)[:-1]]
    rings.extend(list(interior.coords)[:-1] for interior in polygon.interiors)
    return rings


def _build_render_plan(diagram: EulerDiagram, labels: Mapping[str, Point2D]) -> RenderPlan:
    plan = RenderPlan()
    for zone in diagram.shaded_zones:
        polygon = zone.polygon
        parts = list(polygon.geoms) if isinstance(polygon, MultiPolygon) else [polygon]
        for part in parts:
            if not part.is_empty:
                plan.shaded.append(_polygon_rings(part))
    plan.curves.extend(diagram.curves)
    for curve in diagram.curves:
        anchor = labels.get(curve.label)
        if anchor is not None:
            plan.labels.append((curve.label, anchor))
    return plan


def _frame_for(bbox: Optional[BBox], labels: Mapping[str, Point2D]) -> _Frame:
    if bbox is None:
        return _Frame(0.0, 0.0, 1.0)
    min_x, min_y, max_x, max_y = bbox
    for x, y in labels.values():
        min_x, max_x = min(min_x, x), max(max_x, x)
        min_y, max_y = min(min_y, y), max(max_y, y)
    span = max(max_x - min_x, max_y - min_y, 1e-9)
    return _Frame(min_x, max_y, TARGET_WIDTH_CM / span)


# ---------------------------------------------------------------------------
# Emission
# ---------------------------------------------------------------------------

def _coord(frame: _Frame, p: Point2D) -> str:
    x, y = frame.point(p)
    return f"({_format_float(x)}, {_format_float(y)})"


def _ring_path(frame: _Frame, ring: Sequence[Point2D]) -> str:
    return " -- ".join(_coord(frame, p) for p in ring) + " -- cycle"


def _path_elements(frame: _Frame, curve: PathCurve) -> str:
    tokens: List[str] = []
    for element in curve.elements:
        if isinstance(element, MoveTo):
            tokens.append(_coord(frame, (element.x, element.y)))
        elif isinstance(element, LineTo):
            tokens.append("-- " + _coord(frame, (element.x, element.y)))
        elif isinstance(element, CubicTo):
            tokens.append(
                ".. controls {c1} and {c2} .. {end}".format(
                    c1=_coord(frame, (element.c1x, element.c1y)),
                    c2=_coord(frame, (element.c2x, element.c2y)),
                    end=_coord(frame, (element.x, element.y)),
                )
            )
        elif isinstance(element, ClosePath):
            tokens.append("-- cycle")
    return " ".join(tokens)


def _emit_tikz_picture(plan: RenderPlan, frame: _Frame) -> str:
    lines: List[str] = ["\\begin{tikzpicture}"]

    for rings in plan.shaded:
        path = " ".join(_ring_path(frame, ring) for ring in rings)
        lines.append(f"  \\fill[shaded, even odd rule] {path};")

    for curve in plan.curves:
        if isinstance(curve, CircleCurve):
            lines.append(
                "  \\draw[curve] {center} circle ({radius});".format(
                    center=_coord(frame, curve.center),
                    radius=_format_float(frame.length(curve.radius)),
                )
            )
        elif isinstance(curve, PathCurve):
            lines.append(f"  \\draw[curve] {_path_elements(frame, curve)};")

    for label, anchor in plan.labels:
        lines.append(f"  \\node[curvelabel] at {_coord(frame, anchor)} {{{latex_escape(label)}}};")

    lines.append("\\end{tikzpicture}")
    return "\n".join(lines)


def _format_float(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for TikZ output")
    formatted = f"{value:.4f}"
    formatted = formatted.rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted


__all__ = ["generate_tikz_code", "generate_tikz_document"]
