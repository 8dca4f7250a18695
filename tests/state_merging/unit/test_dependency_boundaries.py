"""Boundary tests for state_merging internal dependencies."""

from __future__ import annotations

from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def test_merge_core_does_not_import_outer_layers() -> None:
    merging_dir = _project_root() / "src" / "state_reconciler" / "state_merging"
    forbidden_import_fragments = (
        "state_reconciler.configuration",
        "state_reconciler.results_writing",
        "state_reconciler.run_execution",
        "state_reconciler.cli",
        "openpyxl",
        "click",
    )

    for module_path in sorted(merging_dir.glob("*.py")):
        text = module_path.read_text(encoding="utf-8")
        for fragment in forbidden_import_fragments:
            assert fragment not in text, f"Forbidden core dependency in {module_path}: {fragment}"


def test_value_hashing_stays_standalone() -> None:
    hashing_dir = _project_root() / "src" / "state_reconciler" / "value_hashing"

    for module_path in sorted(hashing_dir.glob("*.py")):
        text = module_path.read_text(encoding="utf-8")
        assert "state_reconciler." not in text, f"Unexpected package import in {module_path}"
