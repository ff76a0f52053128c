import json
from pathlib import Path

from click.testing import CliRunner

from splade_core.cli.main import cli

VIEW = "<script setup>let x = 1</script><div>{{ x }}</div>"


def write_files(tmp_path: Path, bridge: dict) -> tuple[Path, Path]:
    view = tmp_path / "counter.blade.php"
    view.write_text(VIEW, encoding="utf-8")
    bridge_file = tmp_path / "bridge.json"
    bridge_file.write_text(json.dumps(bridge), encoding="utf-8")
    return view, bridge_file


def test_compile_writes_component(tmp_path: Path) -> None:
    view, bridge_file = write_files(
        tmp_path, {"spladeBridge": {"tag": "Counter", "functions": [], "data": {}}}
    )
    out_dir = tmp_path / "compiled"

    result = CliRunner().invoke(
        cli,
        ["compile", str(view), "--bridge", str(bridge_file), "--out-dir", str(out_dir)],
    )

    assert result.exit_code == 0, result.output
    assert "<div>{{ x }}</div>" in result.output
    assert 'name: "CounterRender"' in (out_dir / "Counter.vue").read_text()


def test_compile_accepts_bare_descriptor(tmp_path: Path) -> None:
    view, bridge_file = write_files(
        tmp_path, {"tag": "Counter", "functions": ["save"], "data": {}}
    )
    markup_file = tmp_path / "markup.html"

    result = CliRunner().invoke(
        cli,
        [
            "compile",
            str(view),
            "--bridge",
            str(bridge_file),
            "--out-dir",
            str(tmp_path / "compiled"),
            "--output",
            str(markup_file),
        ],
    )

    assert result.exit_code == 0, result.output
    assert markup_file.read_text() == "<div>{{ x }}</div>"
    assert "asyncComponentMethod('save'" in (tmp_path / "compiled" / "Counter.vue").read_text()


def test_compile_reports_contract_errors(tmp_path: Path) -> None:
    view, bridge_file = write_files(tmp_path, {"functions": [], "data": {}})

    result = CliRunner().invoke(
        cli,
        ["compile", str(view), "--bridge", str(bridge_file), "--out-dir", str(tmp_path)],
    )

    assert result.exit_code == 1


def test_compile_rejects_invalid_json(tmp_path: Path) -> None:
    view, bridge_file = write_files(tmp_path, {})
    bridge_file.write_text("{not json", encoding="utf-8")

    result = CliRunner().invoke(
        cli,
        ["compile", str(view), "--bridge", str(bridge_file), "--out-dir", str(tmp_path)],
    )

    assert result.exit_code == 2


def test_clear_removes_components(tmp_path: Path) -> None:
    (tmp_path / "Foo.vue").write_text("a")
    (tmp_path / "Bar.vue").write_text("b")

    result = CliRunner().invoke(cli, ["clear", "--out-dir", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert list(tmp_path.glob("*.vue")) == []
