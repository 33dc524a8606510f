from dataclasses import dataclass
from pathlib import Path

from graphql import DocumentNode, GraphQLSyntaxError, parse

from resolver_check import log
from resolver_check.discovery import find_files, require_directory
from resolver_check.errors import (
    InvalidSchemaDirectoryError,
    NoSchemaFilesError,
    SchemaParseError,
    SchemaReadError,
)


@dataclass(frozen=True)
class SchemaDocument:
    path: Path
    document: DocumentNode


def resolve_schema_files(schema_dir: Path, suffixes: tuple[str, ...]) -> list[Path]:
    """Resolve a schema directory into the sorted list of schema files it contains.

    Args:
        schema_dir: Directory holding GraphQL SDL files, searched recursively
        suffixes: File suffixes that mark a schema file

    Returns:
        Sorted list of schema file paths

    Raises:
        InvalidSchemaDirectoryError: If schema_dir does not exist or is not a directory
        NoSchemaFilesError: If no file under schema_dir has a schema suffix
    """
    require_directory(schema_dir, InvalidSchemaDirectoryError, "Schema")

    schema_files = find_files(schema_dir, suffixes)
    if not schema_files:
        raise NoSchemaFilesError(f"No schema files ({', '.join(suffixes)}) found", schema_dir)
    return schema_files


def load_schema_document(schema_file: Path) -> SchemaDocument:
    """Read one SDL file and parse it into a document.

    Raises:
        SchemaReadError: If the file cannot be read or decoded
        SchemaParseError: If the file is not valid GraphQL SDL
    """
    try:
        content = schema_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaReadError(f"Cannot read schema file ({e})", schema_file) from e

    try:
        document = parse(content)
    except GraphQLSyntaxError as e:
        raise SchemaParseError(f"Invalid GraphQL syntax ({e.message})", schema_file) from e

    log.debug(f"Parsed {len(document.definitions)} definition(s) from {schema_file}")
    return SchemaDocument(path=schema_file, document=document)


def load_schema_documents(schema_dir: Path, suffixes: tuple[str, ...]) -> list[SchemaDocument]:
    """Load every schema file under schema_dir, failing on the first unreadable or invalid one."""
    schema_files = resolve_schema_files(schema_dir, suffixes)
    log.info(f"Loading {len(schema_files)} schema file(s) from {schema_dir}")
    return [load_schema_document(schema_file) for schema_file in schema_files]
