from .abstract import AbstractZone, Description, EMPTY_DESCRIPTION, OUTSIDE, az, desc
from .parser import parse_description
from .errors import (
    DescriptionError,
    DescriptionSyntaxError,
    DiagramConstructionError,
    GeometricInfeasibility,
    InvariantViolation,
)
from .curves import CircleCurve, PathCurve, Curve
from .concrete import EulerDiagram, Zone
from .decomposition import decompose, decompose_components, ICurvesStrategy, RecompositionStep
from .dual import MED, MEDCycle
from .creator import (
    create_diagram,
    draw_euler_diagram,
    EulerDiagramCreator,
    CreatorOptions,
    DiagramOK,
    DiagramFail,
    DiagramResult,
    get_creator_options,
    set_creator_options,
)
from .label_placement import place_labels
from .tikz_codegen import generate_tikz_code, generate_tikz_document, latex_escape_keep_math

__all__ = [
    'AbstractZone',
    'Description',
    'EMPTY_DESCRIPTION',
    'OUTSIDE',
    'az',
    'desc',
    'parse_description',
    'DescriptionError',
    'DescriptionSyntaxError',
    'DiagramConstructionError',
    'GeometricInfeasibility',
    'InvariantViolation',
    'CircleCurve',
    'PathCurve',
    'Curve',
    'EulerDiagram',
    'Zone',
    'decompose',
    'decompose_components',
    'ICurvesStrategy',
    'RecompositionStep',
    'MED',
    'MEDCycle',
    'create_diagram',
    'draw_euler_diagram',
    'EulerDiagramCreator',
    'CreatorOptions',
    'DiagramOK',
    'DiagramFail',
    'DiagramResult',
    'get_creator_options',
    'set_creator_options',
    'place_labels',
    'generate_tikz_code',
    'generate_tikz_document',
    'latex_escape_keep_math',
]
