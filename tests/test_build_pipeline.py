"""
Tests pour le pipeline de build.

Vérifie l'emplacement de sortie, la copie verbatim des métadonnées, l'arrêt du
build sur la première erreur et l'aller-retour build -> scan -> lecture.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from docportal.domain.catalog import build_catalog
from docportal.domain.content import ContentResolver
from docportal.domain.errors import ConversionFailure, MalformedHierarchy, NotFound
from docportal.services.build_pipeline import build_product, collect_sources
from tests.fakes import FAIL_MARKER, SAMPLE_ROUTE, render


def test_build_writes_fragments_and_metadata(product_dir: Path, store_root: Path, converters) -> None:
    (product_dir / "src" / "setup.md").write_text("# Setup\n", encoding="utf-8")

    report = build_product(product_dir, store_root, converters)

    out = store_root / SAMPLE_ROUTE
    assert report.output_dir == out
    assert str(report.route) == SAMPLE_ROUTE
    assert report.product_id == "s3-docs"
    assert report.pages == ["intro", "setup"]
    assert (out / "intro.html").read_text(encoding="utf-8") == render("= Introduction\n\nHello S3.\n")
    assert "<h1>Setup</h1>" in (out / "setup.html").read_text(encoding="utf-8")
    assert (out / "docs.yaml").read_bytes() == (product_dir / "docs.yaml").read_bytes()


def test_unknown_source_types_are_ignored(product_dir: Path, store_root: Path, converters) -> None:
    (product_dir / "src" / "diagram.png").write_bytes(b"\x89PNG")
    (product_dir / "src" / "nested").mkdir()
    (product_dir / "src" / "nested" / "deep.adoc").write_text("= Deep\n", encoding="utf-8")

    report = build_product(product_dir, store_root, converters)

    assert report.pages == ["intro"]
    assert collect_sources(product_dir / "src", converters) == [product_dir / "src" / "intro.adoc"]


def test_conversion_failure_aborts_without_writing(product_dir: Path, store_root: Path, converters) -> None:
    (product_dir / "src" / "zz-broken.adoc").write_text(f"= Broken\n{FAIL_MARKER}\n", encoding="utf-8")

    with pytest.raises(ConversionFailure) as excinfo:
        build_product(product_dir, store_root, converters)

    assert excinfo.value.source.endswith("zz-broken.adoc")
    assert not (store_root / SAMPLE_ROUTE).exists()


def test_two_sources_for_same_page_fail(product_dir: Path, store_root: Path, converters) -> None:
    (product_dir / "src" / "intro.md").write_text("# Intro\n", encoding="utf-8")
    with pytest.raises(ConversionFailure):
        build_product(product_dir, store_root, converters)


def test_missing_metadata_fails(product_dir: Path, store_root: Path, converters) -> None:
    (product_dir / "docs.yaml").unlink()
    with pytest.raises(NotFound):
        build_product(product_dir, store_root, converters)
    assert list(store_root.iterdir()) == []


def test_missing_hierarchy_domain_fails(product_dir: Path, store_root: Path, converters) -> None:
    path = product_dir / "docs.yaml"
    path.write_text(path.read_text(encoding="utf-8").replace("  domain: infrastructure\n", ""), encoding="utf-8")
    with pytest.raises(MalformedHierarchy):
        build_product(product_dir, store_root, converters)
    assert list(store_root.iterdir()) == []


def test_missing_source_dir_publishes_metadata_only(product_dir: Path, store_root: Path, converters) -> None:
    (product_dir / "src" / "intro.adoc").unlink()
    (product_dir / "src").rmdir()

    report = build_product(product_dir, store_root, converters)

    assert report.pages == []
    assert sorted(p.name for p in (store_root / SAMPLE_ROUTE).iterdir()) == ["docs.yaml"]


def test_build_then_scan_then_resolve(product_dir: Path, store_root: Path, converters) -> None:
    """Aller-retour: le produit construit est découvert et sa page relue à l'identique."""
    build_product(product_dir, store_root, converters)

    catalog = build_catalog(store_root)
    assert [p.path for p in catalog["infrastructure"]["cloud"]] == [SAMPLE_ROUTE]

    artifact = ContentResolver(store_root).resolve_content(SAMPLE_ROUTE, "intro")
    assert artifact.html == render("= Introduction\n\nHello S3.\n")


def test_rebuild_overwrites_fragments(product_dir: Path, store_root: Path, converters) -> None:
    build_product(product_dir, store_root, converters)
    (product_dir / "src" / "intro.adoc").write_text("= Updated\n", encoding="utf-8")
    build_product(product_dir, store_root, converters)
    assert (store_root / SAMPLE_ROUTE / "intro.html").read_text(encoding="utf-8") == render("= Updated\n")
