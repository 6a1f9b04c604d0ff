"""Tests pour les moteurs de conversion et leur registre."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from docportal.domain.errors import ConversionFailure
from docportal.infra.converters.asciidoctor import AsciidoctorConverter
from docportal.infra.converters.markdown import MarkdownConverter
from docportal.infra.converters.registry import ConverterRegistry, default_registry
from tests.fakes import FakeConverter


def test_asciidoctor_command_line() -> None:
    conv = AsciidoctorConverter(executable="asciidoctor", requires=["asciidoctor-kroki"])
    cmd = conv.command({"icons": "font"})
    assert cmd[:4] == ["asciidoctor", "-s", "-o", "-"]
    assert ["-r", "asciidoctor-kroki"] == cmd[4:6]
    assert "showtitle" in cmd
    assert "role=doc-content" in cmd
    assert "icons=font" in cmd
    assert cmd[-1] == "-"


def test_asciidoctor_returns_stdout() -> None:
    conv = AsciidoctorConverter()
    done = subprocess.CompletedProcess(args=[], returncode=0, stdout="<div>ok</div>", stderr="")
    with patch("docportal.infra.converters.asciidoctor.subprocess.run", return_value=done) as run:
        assert conv.convert("= Title") == "<div>ok</div>"
    assert run.call_args.kwargs["input"] == "= Title"


def test_asciidoctor_non_zero_exit() -> None:
    conv = AsciidoctorConverter()
    done = subprocess.CompletedProcess(args=[], returncode=1, stdout="", stderr="boom")
    with patch("docportal.infra.converters.asciidoctor.subprocess.run", return_value=done):
        with pytest.raises(ConversionFailure, match="boom"):
            conv.convert("= Title")


def test_asciidoctor_missing_executable() -> None:
    conv = AsciidoctorConverter(executable="definitely-not-installed-asciidoctor")
    with patch("docportal.infra.converters.asciidoctor.subprocess.run", side_effect=FileNotFoundError()):
        with pytest.raises(ConversionFailure, match="not found"):
            conv.convert("= Title")


def test_asciidoctor_timeout() -> None:
    conv = AsciidoctorConverter(timeout=0.5)
    with patch(
        "docportal.infra.converters.asciidoctor.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="asciidoctor", timeout=0.5),
    ):
        with pytest.raises(ConversionFailure, match="timed out"):
            conv.convert("= Title")


def test_markdown_renders_fragment() -> None:
    html = MarkdownConverter().convert("# Intro\n\nHello *S3*.\n")
    assert html.startswith('<div class="doc-content">')
    assert "<h1>Intro</h1>" in html
    assert "<em>S3</em>" in html
    assert "<html" not in html


def test_markdown_without_role() -> None:
    html = MarkdownConverter().convert("text", {"role": ""})
    assert html == "<p>text</p>\n"


def test_registry_lookup() -> None:
    registry = default_registry()
    assert registry.extensions == (".adoc", ".asciidoc", ".md")
    assert isinstance(registry.for_path("intro.ADOC"), AsciidoctorConverter)
    assert isinstance(registry.for_path("intro.md"), MarkdownConverter)
    assert registry.for_path("intro.txt") is None


def test_register_normalizes_extension() -> None:
    registry = ConverterRegistry()
    registry.register("ADOC", FakeConverter())
    assert registry.extensions == (".adoc",)


def test_convert_file_unknown_extension(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("x", encoding="utf-8")
    with pytest.raises(ConversionFailure) as excinfo:
        ConverterRegistry().convert_file(path)
    assert excinfo.value.source == str(path)


def test_convert_file_missing_source(tmp_path: Path) -> None:
    registry = ConverterRegistry({".adoc": FakeConverter()})
    with pytest.raises(ConversionFailure):
        registry.convert_file(tmp_path / "missing.adoc")


def test_convert_file_tags_failure_with_source(tmp_path: Path) -> None:
    path = tmp_path / "broken.adoc"
    path.write_text("!!fail!!", encoding="utf-8")
    registry = ConverterRegistry({".adoc": FakeConverter()})
    with pytest.raises(ConversionFailure) as excinfo:
        registry.convert_file(path)
    assert excinfo.value.source == str(path)
