import logging
import sys
from pathlib import Path

import rich_click as click
from rich.traceback import install

from resolver_check import __version__, log
from resolver_check.config import DuplicateQueryPolicy, load_check_config
from resolver_check.errors import ResolverCheckError
from resolver_check.models import CoverageReport
from resolver_check.pipeline import run_check

EXIT_MISMATCHES = 1
EXIT_ERROR = 2

DEFAULT_SCHEMA_PATH = Path("src/main/resources/graphql")
DEFAULT_SOURCE_PATH = Path("src/main/kotlin")


@click.group(context_settings={"auto_envvar_prefix": "RESOLVER_CHECK"})
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="INFO",
    help="Log level",
    show_default=True,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Log file",
)
@click.version_option(__version__)
def cli(log_level: str, log_file: Path | None) -> None:
    """Check that every GraphQL query has a resolver in a Kotlin source tree."""
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(message)s"))
        log.addHandler(file_handler)

    log.setLevel(log_level.upper())
    if log_level.upper() == "DEBUG":
        _ = install(show_locals=True)


def print_report(report: CoverageReport) -> None:
    log.rule(f"{report.root_type} resolver coverage")
    log.key_value("Schema files", len(report.schema.files))
    log.key_value("Source files", len(report.source.files))
    log.key_value(f"{report.root_type} fields", len(report.schema.queries))
    log.key_value("Bound resolvers", len(report.source.bindings))

    if report.is_covered:
        log.success(f"All {report.root_type} fields have proper resolvers!")
        return

    log.error(f"Found {len(report.mismatches)} missing resolver(s):")
    for mismatch in report.mismatches:
        log.list_item(
            f"{report.root_type} [underline]{mismatch.query_name}[/underline] doesn't have a proper resolver",
            prefix="✖",
            style="red",
        )


@cli.command(name="check")
@click.option(
    "--project-path",
    "-p",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    required=True,
    help="Root directory of the project to check",
)
@click.option(
    "--schema-path",
    type=click.Path(path_type=Path),
    default=DEFAULT_SCHEMA_PATH,
    help="Schema directory, relative to the project path",
    show_default=True,
)
@click.option(
    "--source-path",
    type=click.Path(path_type=Path),
    default=DEFAULT_SOURCE_PATH,
    help="Kotlin source directory, relative to the project path",
    show_default=True,
)
@click.option(
    "--root-type",
    "-r",
    type=str,
    help="Root type whose fields must have resolvers [default: Query]",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with check settings",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail on Kotlin files containing syntax errors",
)
@click.option(
    "--duplicate-queries",
    type=click.Choice([policy.value for policy in DuplicateQueryPolicy]),
    help="How to treat a root-type field declared more than once [default: keep-first]",
)
def check(
    project_path: Path,
    schema_path: Path,
    source_path: Path,
    root_type: str | None,
    config_path: Path | None,
    strict: bool | None,
    duplicate_queries: str | None,
) -> None:
    """Report every root-type field of the schema that no function resolves.

    Exit codes:
    - 0: every field has a resolver
    - 1: at least one resolver is missing
    - 2: the check could not run (bad paths, unreadable or invalid files)
    """
    project_dir = project_path.resolve()
    schema_dir = project_dir / schema_path
    source_dir = project_dir / source_path

    log.key_value("Schema dir", f"[cyan]{schema_dir}[/cyan]")
    log.key_value("Source dir", f"[cyan]{source_dir}[/cyan]")

    try:
        config = load_check_config(
            config_path,
            root_type=root_type,
            strict_parsing=strict,
            duplicate_queries=duplicate_queries,
        )
        report = run_check(schema_dir, source_dir, config)
    except ResolverCheckError as e:
        log.error(str(e))
        sys.exit(EXIT_ERROR)

    print_report(report)
    if not report.is_covered:
        log.hint("Validation failed!")
        sys.exit(EXIT_MISMATCHES)
    log.hint("Validation complete!")


if __name__ == "__main__":
    cli()
