from __future__ import annotations

import json
from pathlib import Path

import pytest

from asmdef.catalog import ProjectCatalog, StaticCatalog, read_meta_guid
from asmdef.index import ModuleIndex, resolve_reference
from asmdef.models import (
    DescriptorError,
    GuidReference,
    NameReference,
    parse_asmdef,
    parse_asmdef_text,
    parse_reference,
)


def _write_asmdef(path: Path, payload: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_parse_reference_variants() -> None:
    assert parse_reference("GUID:abc123") == GuidReference(raw="GUID:abc123", guid="abc123")
    assert parse_reference("guid: abc123 ") == GuidReference(
        raw="guid: abc123 ", guid="abc123"
    )
    assert parse_reference(" Game.Core") == NameReference(raw=" Game.Core", name="Game.Core")
    assert parse_reference("GUIDANCE.Core") == NameReference(
        raw="GUIDANCE.Core", name="GUIDANCE.Core"
    )


@pytest.mark.parametrize("raw", [None, "", "   ", "\t"])
def test_parse_reference_blank(raw: str | None) -> None:
    assert parse_reference(raw) is None


def test_parse_asmdef_text_reads_name_and_references() -> None:
    data = parse_asmdef_text(
        '{"name": "Game.Core", "references": ["GUID:aa", "Other"], "autoReferenced": true}'
    )

    assert data.name == "Game.Core"
    assert data.references == ["GUID:aa", "Other"]


def test_parse_asmdef_text_tolerates_missing_references() -> None:
    data = parse_asmdef_text('{"name": "Game.Core"}')

    assert data.references is None


@pytest.mark.parametrize("text", ["", "{", "[]", '{"name": 5}'])
def test_parse_asmdef_text_rejects_malformed(text: str) -> None:
    with pytest.raises(DescriptorError):
        parse_asmdef_text(text)


def test_parse_asmdef_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DescriptorError, match="File not found"):
        parse_asmdef(tmp_path / "Missing.asmdef")


def test_parse_asmdef_accepts_utf8_bom(tmp_path: Path) -> None:
    path = tmp_path / "Bom.asmdef"
    path.write_bytes(b'\xef\xbb\xbf{"name": "Bom"}')

    assert parse_asmdef(path).name == "Bom"


def test_module_index_first_registered_wins(tmp_path: Path) -> None:
    first = _write_asmdef(tmp_path / "a" / "Shared.asmdef", {"name": "Shared"})
    second = _write_asmdef(tmp_path / "b" / "Shared.asmdef", {"name": "SHARED"})
    broken = tmp_path / "c" / "Broken.asmdef"
    broken.parent.mkdir()
    broken.write_text("{", encoding="utf-8")
    nameless = _write_asmdef(tmp_path / "d" / "Nameless.asmdef", {"references": []})

    index = ModuleIndex.build(StaticCatalog([first, broken, second, nameless]))

    assert len(index) == 1
    assert index.lookup("shared") == first
    assert "Shared" in index
    assert index.lookup("Broken") is None


def test_resolve_reference_branches_on_variant(tmp_path: Path) -> None:
    by_name = tmp_path / "Named.asmdef"
    by_guid = tmp_path / "Guid.asmdef"
    index = ModuleIndex()
    index.add("Named", by_name)
    catalog = StaticCatalog([], {"ABCD": by_guid})

    assert resolve_reference(parse_reference("named"), catalog, index) == by_name
    assert resolve_reference(parse_reference("GUID:abcd"), catalog, index) == by_guid
    assert resolve_reference(parse_reference("GUID:"), catalog, index) is None
    assert resolve_reference(parse_reference("Guid"), catalog, index) is None


def test_read_meta_guid(tmp_path: Path) -> None:
    asset = _write_asmdef(tmp_path / "Game.asmdef", {"name": "Game"})
    asset.with_name("Game.asmdef.meta").write_text(
        "fileFormatVersion: 2\nguid: 0A1B2C3D\nAssemblyDefinitionImporter:\n",
        encoding="utf-8",
    )

    assert read_meta_guid(asset) == "0a1b2c3d"
    assert read_meta_guid(tmp_path / "Other.asmdef") is None


def test_project_catalog_scans_catalog_roots(tmp_path: Path) -> None:
    project = tmp_path / "project"
    assets = _write_asmdef(project / "Assets" / "Game.asmdef", {"name": "Game"})
    embedded = _write_asmdef(
        project / "Packages" / "com.acme.tool" / "Tool.asmdef", {"name": "Tool"}
    )
    cached = _write_asmdef(
        project / "Library" / "PackageCache" / "com.unity.x@1.0.0" / "X.asmdef",
        {"name": "X"},
    )
    _write_asmdef(project / "Library" / "ScriptAssemblies" / "Y.asmdef", {"name": "Y"})
    _write_asmdef(project / "Temp" / "Z.asmdef", {"name": "Z"})
    cached.with_name("X.asmdef.meta").write_text("guid: feed\n", encoding="utf-8")

    catalog = ProjectCatalog(project)

    assert catalog.find_all_modules() == [assets, embedded, cached]
    assert catalog.resolve_identifier("FEED") == cached
    assert catalog.resolve_identifier("beef") is None
