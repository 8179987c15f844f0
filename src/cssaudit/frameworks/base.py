"""Framework class oracle protocol."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class FrameworkOracle(Protocol):
    """Answers whether a class name belongs to a utility-class framework.

    Oracles are built once per run and must not change afterwards.
    """

    @property
    def name(self) -> str:
        """Human-readable framework name."""
        ...

    def is_framework_class(self, class_name: str) -> bool:
        """Check if ``class_name`` is generated by the framework."""
        ...


class NullOracle:
    """Oracle used when no utility-class framework is configured."""

    @property
    def name(self) -> str:
        return "none"

    def is_framework_class(self, class_name: str) -> bool:
        return False
