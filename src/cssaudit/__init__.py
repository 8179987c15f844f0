"""css-audit: find unused and undefined CSS classes across a web project."""

__version__ = "0.1.0"
