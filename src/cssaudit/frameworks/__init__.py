"""Framework class oracles."""

from pathlib import Path

from cssaudit.frameworks.base import FrameworkOracle, NullOracle
from cssaudit.frameworks.tailwind import TailwindOracle, detect_tailwind


def create_framework_oracle(project_root: Path, enabled: bool = True) -> FrameworkOracle:
    """Build the framework oracle for a project.

    Called once per run, before any file is processed. Falls back to a
    ``NullOracle`` when no supported framework is detected.
    """
    if not enabled:
        return NullOracle()

    tailwind = detect_tailwind(project_root)
    if tailwind is not None:
        return tailwind

    return NullOracle()


__all__ = [
    "FrameworkOracle",
    "NullOracle",
    "TailwindOracle",
    "create_framework_oracle",
    "detect_tailwind",
]
