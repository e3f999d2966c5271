"""Example pipeline: nested and disjoint components written to TikZ."""

import sys
from pathlib import Path

from eulerlayout import DiagramFail, create_diagram, decompose_components, generate_tikz_document, place_labels

TEXT = "a b ab c ad abd"


def main() -> None:
    output = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("nested.tex")
    result = create_diagram(TEXT)
    if isinstance(result, DiagramFail):
        print(f"Failed ({result.kind}): {result.message}")
        raise SystemExit(1)

    diagram = result.diagram
    print("Components:")
    for component in decompose_components(diagram.original_description):
        print(f"  {component!r}")
    print("Shaded zones:", [zone.az.to_informal() for zone in diagram.shaded_zones] or "(none)")

    output.write_text(generate_tikz_document(diagram, place_labels(diagram.curves)), encoding="utf-8")
    print(f"TikZ document written to {output}")


if __name__ == "__main__":
    main()
