"""Tests for the command-line interface."""

from PIL import Image
from typer.testing import CliRunner

from placeholder_api.cli import app

runner = CliRunner()


def test_render_writes_output(tmp_path):
    target = tmp_path / "out.png"
    result = runner.invoke(app, ["render", "300x200/red.png?text=Hi", "--output", str(target)])
    assert result.exit_code == 0, result.output
    with Image.open(target) as image:
        assert image.format == "PNG"
        assert image.size == (300, 200)


def test_render_default_output_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["render", "64x64"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "placeholder.svg").read_text().startswith("<svg")


def test_render_rejects_invalid_path(tmp_path):
    result = runner.invoke(app, ["render", "0300x200", "-o", str(tmp_path / "x.svg")])
    assert result.exit_code == 2
    assert not (tmp_path / "x.svg").exists()


def test_render_with_missing_config(tmp_path):
    result = runner.invoke(
        app, ["render", "64x64", "--config", str(tmp_path / "nope.yml"), "-o", str(tmp_path / "x.svg")]
    )
    assert result.exit_code == 1


def test_render_with_config(tmp_path):
    config = tmp_path / "config.yml"
    config.write_text("defaultFormat: png\nmaxSize: 100\n")
    target = tmp_path / "out.png"
    result = runner.invoke(app, ["render", "500", "--config", str(config), "-o", str(target)])
    assert result.exit_code == 0, result.output
    with Image.open(target) as image:
        assert image.size == (100, 100)
