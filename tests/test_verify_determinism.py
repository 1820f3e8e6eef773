from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from manifest.models import Dependency
from resolve.models import FetchResult
from verify.verify import DeterminismResult, verify_determinism

if TYPE_CHECKING:
    from pathlib import Path


def _write_minimal_package(root: Path) -> Path:
    (root / "Assets").mkdir(parents=True, exist_ok=True)
    package_json = root / "Packages" / "p1" / "package.json"
    package_json.parent.mkdir(parents=True)
    package_json.write_text(
        json.dumps({"name": "com.acme.p1", "version": "1.0.0"}), encoding="utf-8"
    )
    (package_json.parent / "Acme.A.asmdef").write_text(
        json.dumps({"name": "Acme.A", "references": ["Missing"]}), encoding="utf-8"
    )
    return package_json


def test_verify_determinism_requires_descriptor(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Package descriptor does not exist"):
        verify_determinism(package_json_path=tmp_path / "package.json")


def test_verify_determinism_unchanged_tree(tmp_path: Path) -> None:
    package_json = _write_minimal_package(tmp_path / "project")

    result = verify_determinism(package_json_path=package_json)

    assert result == DeterminismResult(ok=True)


def test_verify_determinism_reports_sorted_mismatches(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    package_json = _write_minimal_package(tmp_path / "project")
    runs = iter(
        [
            FetchResult(
                dependencies=[Dependency(name="com.acme.b", version="1.0.0")],
                unresolved=["x"],
            ),
            FetchResult(
                dependencies=[Dependency(name="com.acme.b", version="2.0.0")],
                unresolved=["x"],
                warnings=["late warning"],
            ),
        ]
    )

    def _fake_fetch(*_args: object, **_kwargs: object) -> FetchResult:
        return next(runs)

    monkeypatch.setattr("verify.verify.fetch_from_package_root", _fake_fetch)

    result = verify_determinism(package_json_path=package_json)

    assert result == DeterminismResult(
        ok=False,
        mismatches=("dependencies", "warnings"),
    )
