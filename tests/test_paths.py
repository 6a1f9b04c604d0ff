"""Tests pour l'assainissement des chemins demandés."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from docportal.domain.errors import NotFound, PathTraversal
from docportal.domain.paths import normalize_subpath, sanitize


def test_sanitize_simple_page(tmp_path: Path) -> None:
    assert sanitize(tmp_path, "intro") == tmp_path.resolve() / "intro"


@pytest.mark.parametrize("requested", [None, "", "/", ".", "a/.."])
def test_empty_request_uses_default_page(tmp_path: Path, requested) -> None:
    assert sanitize(tmp_path, requested) == tmp_path.resolve() / "intro"
    assert sanitize(tmp_path, requested, default="home") == tmp_path.resolve() / "home"


def test_empty_request_without_default_is_rejected(tmp_path: Path) -> None:
    with pytest.raises(PathTraversal):
        sanitize(tmp_path, "", default=None)


def test_inner_dot_segments_are_resolved(tmp_path: Path) -> None:
    assert sanitize(tmp_path, "guide/./../setup") == tmp_path.resolve() / "setup"
    assert sanitize(tmp_path, "/guide/setup") == tmp_path.resolve() / "guide" / "setup"


@pytest.mark.parametrize(
    "requested",
    [
        "..",
        "../etc/passwd",
        "a/../../etc/passwd",
        "infrastructure/cloud/S3/v1/../../../../../etc/passwd",
        "..\\..\\windows",
        "intro\x00.html",
    ],
)
def test_escaping_paths_raise_path_traversal(tmp_path: Path, requested: str) -> None:
    with pytest.raises(PathTraversal):
        sanitize(tmp_path / "root", requested)


def test_result_always_inside_root(tmp_path: Path) -> None:
    root = tmp_path / "root"
    for requested in ["a/b/../c", "x/y/z", "/abs/olute", "a\\b"]:
        result = sanitize(root, requested)
        assert root.resolve() in result.parents


def test_symlink_escaping_root_is_rejected(tmp_path: Path) -> None:
    root = tmp_path / "root"
    outside = tmp_path / "outside"
    root.mkdir()
    outside.mkdir()
    (outside / "secret.html").write_text("secret", encoding="utf-8")
    os.symlink(outside, root / "link")
    with pytest.raises(PathTraversal):
        sanitize(root, "link/secret.html")


def test_path_traversal_is_reported_as_not_found() -> None:
    assert issubclass(PathTraversal, NotFound)


def test_normalize_subpath() -> None:
    assert normalize_subpath("a//b/./c") == "a/b/c"
    assert normalize_subpath("./") == ""
