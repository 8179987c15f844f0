"""Resolution of class definitions against class usages."""

from cssaudit.analysis.engine import Analyzer, find_undefined, find_unused, resolve
from cssaudit.analysis.index import NameIndex, NameIndexBuilder
from cssaudit.analysis.policy import ExclusionPolicy

__all__ = [
    "Analyzer",
    "ExclusionPolicy",
    "NameIndex",
    "NameIndexBuilder",
    "find_undefined",
    "find_unused",
    "resolve",
]
