"""Example pipeline: decompose a description and draw it with circles."""

from eulerlayout import create_diagram, decompose, parse_description, place_labels
from eulerlayout import DiagramFail

TEXT = """
# Three mutually overlapping sets
a b c
ab ac bc
abc
"""


def main() -> None:
    description = parse_description(TEXT)
    print(f"Description: {description.to_informal()}")

    print("Recomposition steps:")
    for i, step in enumerate(reversed(decompose(description))):
        print(f"  [{i}] {step}")

    result = create_diagram(description)
    if isinstance(result, DiagramFail):
        print(f"Failed ({result.kind}): {result.message}")
        return

    diagram = result.diagram
    print("\nCurves:")
    for curve in diagram.curves:
        print(f"  {curve}")
    print("Zone anchors:")
    for zone in diagram.zones:
        x, y = zone.visual_center
        print(f"  {zone.az.to_informal()}: ({x:.3f}, {y:.3f})")
    print("Labels:")
    for name, (x, y) in place_labels(diagram.curves).items():
        print(f"  {name}: ({x:.3f}, {y:.3f})")


if __name__ == "__main__":
    main()
