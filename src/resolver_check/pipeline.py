from pathlib import Path

from resolver_check import log
from resolver_check.config import CheckConfig
from resolver_check.coverage import find_missing_resolvers
from resolver_check.discovery import require_directory
from resolver_check.errors import InvalidSchemaDirectoryError, InvalidSourceDirectoryError
from resolver_check.models import CoverageReport
from resolver_check.schema import extract_schema
from resolver_check.source import extract_source


def run_check(schema_dir: Path, source_dir: Path, config: CheckConfig | None = None) -> CoverageReport:
    """Extract schema, extract source symbols, then match them.

    Both directories are validated before either extraction starts. Any fatal
    error in either extraction stage propagates before matching.
    """
    config = config or CheckConfig()
    require_directory(schema_dir, InvalidSchemaDirectoryError, "Schema")
    require_directory(source_dir, InvalidSourceDirectoryError, "Source")

    log.info("Parsing schema...")
    schema = extract_schema(schema_dir, config)

    log.info("Parsing resolvers...")
    source = extract_source(source_dir, config)

    log.info("Checking for mismatches...")
    mismatches = find_missing_resolvers(schema.queries, source.field_names(config.root_type))

    return CoverageReport(root_type=config.root_type, schema=schema, source=source, mismatches=mismatches)
