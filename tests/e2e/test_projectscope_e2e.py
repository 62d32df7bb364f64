from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr), and the project base artifact on disk.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List, Optional

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "projectscope" / "main.py"


def run_cli(args: List[str], cwd: Optional[Path] = None) -> subprocess.CompletedProcess:
    """
    Execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH so the package resolves
    without being installed.

    Args:
        args: Command line arguments (excluding 'python' and script path).
        cwd: Optional working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: Return code, stdout and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """
    Create a dummy project for E2E testing.

    Structure:
    /shop
      /src
        /components
          Cart.tsx
        index.ts
      package.json
      README.md
      yarn.lock
    """
    root = tmp_path / "shop"
    (root / "src" / "components").mkdir(parents=True)
    (root / "src" / "components" / "Cart.tsx").write_text("export {};", encoding="utf-8")
    (root / "src" / "index.ts").write_text("export {};", encoding="utf-8")
    (root / "README.md").write_text("# Shop", encoding="utf-8")
    (root / "yarn.lock").write_text("", encoding="utf-8")
    (root / "package.json").write_text(json.dumps({
        "name": "shop",
        "description": "Online store",
        "scripts": {"dev": "vite"},
        "dependencies": {"react": "18.2.0"},
        "devDependencies": {"vite": "5.0.0"},
    }), encoding="utf-8")
    return root


def test_e2e_scan_then_context(sample_project: Path) -> None:
    """Scan writes the artifact under the state dir; context renders it."""
    scan = run_cli(["scan", "--json"], cwd=sample_project)
    assert scan.returncode == 0, scan.stderr

    payload = json.loads(scan.stdout)
    overview = payload["overview"]
    assert overview["projectName"] == "shop"
    assert overview["packageManager"] == "yarn"
    assert overview["componentDirectories"] == ["src/components"]
    assert {"React", "Vite", "Node.js", "TypeScript"} <= set(overview["techStack"])
    assert payload["structureFile"]["relativeToCwd"] == ".projectscope/project-structure.json"

    artifact = sample_project / ".projectscope" / "project-structure.json"
    assert artifact.exists()

    ctx = run_cli(["context"], cwd=sample_project)
    assert ctx.returncode == 0, ctx.stderr
    assert ctx.stdout.startswith("Project base summary: shop - Online store")
    assert "Key scripts:\n- dev: vite" in ctx.stdout
    assert "Package manager: yarn" in ctx.stdout


def test_e2e_rescan_replaces_artifact(sample_project: Path) -> None:
    assert run_cli(["scan"], cwd=sample_project).returncode == 0
    (sample_project / "package.json").write_text(json.dumps({"name": "renamed"}), encoding="utf-8")
    assert run_cli(["scan"], cwd=sample_project).returncode == 0

    doc = json.loads((sample_project / ".projectscope" / "project-structure.json").read_text(encoding="utf-8"))
    assert doc["projectName"] == "renamed"


def test_e2e_invalid_root(tmp_path: Path) -> None:
    result = run_cli(["scan", "-r", str(tmp_path / "ghost")], cwd=tmp_path)

    assert result.returncode == 2
    assert "ERROR" in result.stderr


def test_e2e_context_without_scan(tmp_path: Path) -> None:
    result = run_cli(["context"], cwd=tmp_path)

    assert result.returncode == 1
    assert "projectscope scan" in result.stderr


def test_e2e_help() -> None:
    result = run_cli(["--help"])
    assert result.returncode == 0
    assert "scan" in result.stdout
    assert "context" in result.stdout
