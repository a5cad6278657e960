"""Exception hierarchy for the linter.

``ConfigError`` is fatal and stops a run before any file is analyzed.
``ParseError`` is raised per file and is folded into that file's
``AnalysisResult`` by the analyzer, so it never aborts a batch.
"""

from enum import Enum


class ArchitectLinterError(Exception):
    """Base class for all linter errors."""


class ConfigErrorKind(str, Enum):
    """Why a configuration document was rejected."""

    MISSING_FIELD = "missing_field"
    INVALID_TYPE = "invalid_type"
    EMPTY_PATTERN = "empty_pattern"


class ConfigError(ArchitectLinterError):
    """The rule configuration is unusable."""

    def __init__(self, kind: ConfigErrorKind, field: str, message: str):
        self.kind = kind
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}" if field else message)


class ParseError(ArchitectLinterError):
    """A source file could not be parsed.

    ``line`` and ``column`` are 1-based and point at the first syntax
    error found in the file.
    """

    def __init__(self, line: int, column: int, description: str):
        self.line = line
        self.column = column
        self.description = description
        super().__init__(f"{line}:{column}: {description}")
