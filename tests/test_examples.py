"""Smoke tests for the example scripts.

These tests verify that examples run without errors.
They don't verify correctness of results, just that the code executes.
"""

import subprocess
import sys
from pathlib import Path

EXAMPLES_DIR = Path(__file__).parent.parent / "persistent_thrust" / "examples"


def run_example(example_name: str, timeout: int = 120) -> subprocess.CompletedProcess:
    """Run an example script and return the result."""
    script_path = EXAMPLES_DIR / f"{example_name}.py"

    result = subprocess.run(
        [sys.executable, str(script_path)],
        capture_output=True,
        text=True,
        timeout=timeout,
        cwd=Path(__file__).parent.parent,  # Run from project root
    )

    return result


class TestExamplesSmoke:
    """Smoke tests that verify examples run without crashing."""

    def test_ion_warp_burn_runs(self) -> None:
        """Test that ion_warp_burn.py runs without errors."""
        result = run_example("ion_warp_burn")
        assert result.returncode == 0, f"ion_warp_burn failed:\n{result.stderr}"


class TestExamplesOutput:
    """Tests that verify examples produce expected output."""

    def test_ion_warp_burn_output(self) -> None:
        """Test that ion_warp_burn.py reports depletion and completes."""
        result = run_example("ion_warp_burn")
        assert "SIMULATION COMPLETE" in result.stdout
        assert "Thrust warp stopped - propellant depleted" in result.stdout
        assert "DEPLETED_EXIT" in result.stdout
