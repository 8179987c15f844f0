"""Name index of class definitions and usages.

Built in two stages: a ``NameIndexBuilder`` accepts records while files are
being extracted, then ``build()`` freezes them into a read-only ``NameIndex``
used for resolution.
"""

from collections.abc import Iterator
from types import MappingProxyType

from cssaudit.models.records import ClassDefinition, ClassUsage, ExtractionResult


class NameIndexBuilder:
    """Append-only accumulator for extraction records."""

    def __init__(self) -> None:
        self._definitions: dict[str, list[ClassDefinition]] = {}
        self._usages: dict[str, list[ClassUsage]] = {}
        self._built = False

    def insert(self, record: ClassDefinition | ClassUsage) -> None:
        """Append a record under its class name. No deduplication is done."""
        if self._built:
            raise RuntimeError("NameIndexBuilder has already been built")

        if isinstance(record, ClassDefinition):
            self._definitions.setdefault(record.class_name, []).append(record)
        elif isinstance(record, ClassUsage):
            self._usages.setdefault(record.class_name, []).append(record)
        else:
            raise TypeError(f"Cannot index {type(record).__name__}")

    def insert_result(self, result: ExtractionResult) -> None:
        for definition in result.definitions:
            self.insert(definition)
        for usage in result.usages:
            self.insert(usage)

    def build(self) -> "NameIndex":
        """Freeze the accumulated records. The builder cannot be reused."""
        if self._built:
            raise RuntimeError("NameIndexBuilder has already been built")
        self._built = True
        return NameIndex(
            {name: tuple(defs) for name, defs in self._definitions.items()},
            {name: tuple(usages) for name, usages in self._usages.items()},
        )


class NameIndex:
    """Read-only mapping of class names to their definitions and usages."""

    def __init__(
        self,
        definitions: dict[str, tuple[ClassDefinition, ...]] | None = None,
        usages: dict[str, tuple[ClassUsage, ...]] | None = None,
    ) -> None:
        self._definitions = MappingProxyType(dict(definitions or {}))
        self._usages = MappingProxyType(dict(usages or {}))

    def definitions_for(self, class_name: str) -> tuple[ClassDefinition, ...]:
        return self._definitions.get(class_name, ())

    def usages_for(self, class_name: str) -> tuple[ClassUsage, ...]:
        return self._usages.get(class_name, ())

    def definition_entries(self) -> Iterator[tuple[str, tuple[ClassDefinition, ...]]]:
        """Iterate (class name, definitions) in insertion order."""
        yield from self._definitions.items()

    def usage_entries(self) -> Iterator[tuple[str, tuple[ClassUsage, ...]]]:
        """Iterate (class name, usages) in insertion order."""
        yield from self._usages.items()

    @property
    def definition_count(self) -> int:
        return sum(len(defs) for defs in self._definitions.values())

    @property
    def usage_count(self) -> int:
        return sum(len(usages) for usages in self._usages.values())
