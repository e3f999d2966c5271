import json
from types import SimpleNamespace

import pytest

import eulerlayout.__main__ as cli
from eulerlayout.creator import DiagramFail


def test_main_writes_tikz_document(tmp_path, monkeypatch):
    description_path = tmp_path / "venn.txt"
    description_path.write_text("a b ab", encoding="utf-8")

    diagram = SimpleNamespace(
        original_description=SimpleNamespace(to_informal=lambda: "a b ab"),
        actual_description=SimpleNamespace(to_informal=lambda: "a b ab"),
        curves=("curve-a", "curve-b"),
        shaded_zones=(),
    )

    monkeypatch.setattr(cli, "parse_description", lambda text: ("parsed", text))
    monkeypatch.setattr(cli, "create_diagram", lambda description, options: SimpleNamespace(diagram=diagram))
    monkeypatch.setattr(cli, "place_labels", lambda curves: {"a": (0.0, 0.0)})

    tikz_path = tmp_path / "out" / "diagram.tex"
    rendered_documents = []

    def _generate_document(drawn, labels, **kwargs):
        rendered_documents.append((drawn, labels, kwargs))
        return "tikz document"

    monkeypatch.setattr(cli, "generate_tikz_document", _generate_document)

    cli.main(["--file", str(description_path), "--tikz-output-path", str(tikz_path)])

    assert tikz_path.read_text(encoding="utf-8") == "tikz document"
    assert rendered_documents == [(diagram, {"a": (0.0, 0.0)}, {})]


def test_main_writes_json_layout(tmp_path, capsys):
    json_path = tmp_path / "layout.json"

    cli.main(["a b ab", "--json-output-path", str(json_path), "--log-level", "WARNING"])

    data = json.loads(json_path.read_text(encoding="utf-8"))
    assert data["description"] == "a b ab"
    assert [curve["label"] for curve in data["curves"]] == ["a", "b"]
    assert all("label_anchor" in curve for curve in data["curves"])
    assert {zone["zone"] for zone in data["zones"]} == {"a", "b", "ab"}
    assert "Shaded zones:\n  (none)" in capsys.readouterr().out


def test_main_passes_worker_count(monkeypatch):
    seen = []

    def _create(description, options):
        seen.append(options.max_workers)
        return DiagramFail("infeasible", "no room", RuntimeError("no room"))

    monkeypatch.setattr(cli, "create_diagram", _create)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["a b ab", "--workers", "2"])

    assert excinfo.value.code == 1
    assert seen == [2]


def test_main_exits_on_malformed_description():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["a, b"])
    assert excinfo.value.code == 1
