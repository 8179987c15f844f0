"""Data models for class definitions and usages produced by extractors."""

from dataclasses import dataclass, field
from enum import Enum

# Scope value for definitions visible to every file in the project.
GLOBAL_SCOPE = "global"


class Confidence(Enum):
    """How certain an extractor is that a token is really a class reference."""

    HIGH = "high"
    LOW = "low"


@dataclass(frozen=True)
class ClassDefinition:
    """A class name declared as styleable.

    ``scoped`` is either ``GLOBAL_SCOPE`` or the path of the declaring file,
    in which case only usages in that same file satisfy the definition.
    """

    class_name: str
    file: str
    line: int
    scoped: str = GLOBAL_SCOPE

    def __post_init__(self) -> None:
        if not self.class_name:
            raise ValueError("class_name must be a non-empty string")

    @property
    def is_global(self) -> bool:
        return self.scoped == GLOBAL_SCOPE

    def visible_from(self, file: str) -> bool:
        """Check whether a usage in ``file`` is satisfied by this definition."""
        return self.is_global or self.scoped == file

    @classmethod
    def global_(cls, class_name: str, file: str, line: int) -> "ClassDefinition":
        return cls(class_name=class_name, file=file, line=line, scoped=GLOBAL_SCOPE)

    @classmethod
    def local(cls, class_name: str, file: str, line: int) -> "ClassDefinition":
        return cls(class_name=class_name, file=file, line=line, scoped=file)


@dataclass(frozen=True)
class ClassUsage:
    """A reference to a class name in markup, script or template code.

    ``confidence`` has no default: each extractor states it when it builds
    the record.
    """

    class_name: str
    file: str
    line: int
    confidence: Confidence

    def __post_init__(self) -> None:
        if not self.class_name:
            raise ValueError("class_name must be a non-empty string")

    @property
    def is_low_confidence(self) -> bool:
        return self.confidence is Confidence.LOW


@dataclass
class ExtractionResult:
    """Records recovered from a single file."""

    definitions: list[ClassDefinition] = field(default_factory=list)
    usages: list[ClassUsage] = field(default_factory=list)

    def extend(self, other: "ExtractionResult") -> None:
        self.definitions.extend(other.definitions)
        self.usages.extend(other.usages)
