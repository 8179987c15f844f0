"""Class-name exclusion policy."""

import re
from collections.abc import Iterable

from cssaudit.errors import ConfigurationError
from cssaudit.frameworks.base import FrameworkOracle, NullOracle


class ExclusionPolicy:
    """Decides whether a class name is dropped from both detection passes.

    A name is excluded when any user pattern matches it (``re.search``
    semantics) or the framework oracle claims it.
    """

    def __init__(
        self,
        patterns: Iterable[str] = (),
        oracle: FrameworkOracle | None = None,
    ) -> None:
        self.oracle = oracle or NullOracle()
        self._patterns: list[re.Pattern[str]] = []
        for raw in patterns:
            try:
                self._patterns.append(re.compile(raw))
            except re.error as e:
                raise ConfigurationError(f"Invalid ignore pattern {raw!r}: {e}") from e

    @property
    def patterns(self) -> list[str]:
        """Return the raw pattern strings (for debugging)."""
        return [p.pattern for p in self._patterns]

    def matches_pattern(self, class_name: str) -> bool:
        return any(p.search(class_name) for p in self._patterns)

    def is_excluded(self, class_name: str) -> bool:
        if self.matches_pattern(class_name):
            return True
        return self.oracle.is_framework_class(class_name)

    def with_oracle(self, oracle: FrameworkOracle) -> "ExclusionPolicy":
        """Return a policy with the same compiled patterns and a new oracle."""
        policy = ExclusionPolicy(oracle=oracle)
        policy._patterns = list(self._patterns)
        return policy
