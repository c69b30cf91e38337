"""Architectural fitness functions for the engine's layering.

``core`` defines models and ports, ``services`` holds the engine and depends
only on ``core``, and ``adapters``/``cli`` are the only places that touch
network, storage and terminal libraries.
"""

import re
from pathlib import Path

ROOT = Path(__file__).parent.parent
PACKAGE = ROOT / "contour_engine"


def _imports_matching(directory: Path, pattern: str) -> list[str]:
    compiled = re.compile(pattern, re.MULTILINE)
    return [
        str(py_file.relative_to(ROOT))
        for py_file in sorted(directory.rglob("*.py"))
        if compiled.search(py_file.read_text(encoding="utf-8"))
    ]


def test_no_python_modules_at_root():
    """Only packaging and entry-point files may live at the repository root."""
    allowed = {"setup.py", "conftest.py", "main.py", "__main__.py"}
    violations = [f.name for f in ROOT.glob("*.py") if f.name not in allowed]
    assert not violations, f"Unexpected Python modules at root: {violations}"


def test_core_depends_on_nothing_inward():
    """Core must not import services, adapters or the CLI."""
    violations = _imports_matching(
        PACKAGE / "core", r"^\s*(from|import) contour_engine\.(services|adapters|cli|bootstrap)\b"
    )
    assert not violations, f"Core imports outer layers: {violations}"


def test_services_use_ports_not_io_libraries():
    """Services reach the network and storage only through ports."""
    violations = _imports_matching(
        PACKAGE / "services", r"^\s*(from|import) (httpx|tinydb|typer|rich)\b"
    )
    assert not violations, (
        f"Services import I/O libraries directly: {violations}\n"
        "Use contour_engine.core.ports and an adapter instead."
    )


def test_services_do_not_import_adapters():
    violations = _imports_matching(
        PACKAGE / "services", r"^\s*(from|import) contour_engine\.(adapters|cli)\b"
    )
    assert not violations, f"Services import adapters or the CLI: {violations}"


def test_detectors_stay_below_the_orchestrator():
    """Detectors are pure; they never import the orchestrator or resolvers."""
    violations = _imports_matching(
        PACKAGE / "services" / "detectors",
        r"^\s*from contour_engine\.services\.(orchestrator|resolvers|cache_manager)\b",
    )
    assert not violations, f"Detectors import engine internals: {violations}"
