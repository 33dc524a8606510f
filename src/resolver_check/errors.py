"""Error taxonomy for resolver coverage checks.

Configuration, read and parse errors are fatal and abort the run before any
matching happens. Missing resolvers are findings, not errors, and live in
`resolver_check.models`.
"""

from pathlib import Path


class ResolverCheckError(Exception):
    """Base class for every fatal error raised while checking resolver coverage."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        message = super().__str__()
        if self.path is not None:
            return f"{message}: {self.path}"
        return message


class ConfigurationError(ResolverCheckError):
    """Raised when the check cannot start because its inputs are misconfigured."""


class InvalidSchemaDirectoryError(ConfigurationError):
    pass


class InvalidSourceDirectoryError(ConfigurationError):
    pass


class InvalidConfigError(ConfigurationError):
    """Raised when a YAML configuration file cannot be loaded or validated."""


class NoSchemaFilesError(ResolverCheckError):
    """Raised when the schema directory holds no file with a schema suffix."""


class ParseError(ResolverCheckError):
    pass


class SchemaParseError(ParseError):
    pass


class SourceParseError(ParseError):
    pass


class ReadError(ResolverCheckError):
    pass


class SchemaReadError(ReadError):
    pass


class SourceReadError(ReadError):
    pass


class DuplicateQueryError(ResolverCheckError):
    """Raised when a root-type field is declared twice and duplicates are rejected."""

    def __init__(self, query_name: str, path: Path | None = None) -> None:
        super().__init__(f"Query '{query_name}' is declared more than once", path)
        self.query_name = query_name
