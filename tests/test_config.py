from pathlib import Path

import pytest

from resolver_check.config import CheckConfig, DuplicateQueryPolicy, load_check_config
from resolver_check.errors import ConfigurationError, InvalidConfigError
from tests.conftest import WriteFiles


def test_defaults() -> None:
    config = load_check_config(None)

    assert config == CheckConfig()
    assert config.root_type == "Query"
    assert config.schema_suffixes == (".graphqls", ".graphql", ".gql")
    assert config.source_extensions == (".kt",)
    assert config.strict_parsing is False
    assert config.duplicate_queries is DuplicateQueryPolicy.KEEP_FIRST


def test_load_yaml(write_files: WriteFiles) -> None:
    root = write_files(
        {
            "check.yaml": """
rootType: Mutation
schemaSuffixes: [graphqls]
sourceExtensions: [".kt", ".KTS"]
strictParsing: true
duplicateQueries: error
""",
        }
    )

    config = load_check_config(root / "check.yaml")

    assert config.root_type == "Mutation"
    assert config.schema_suffixes == (".graphqls",)
    assert config.source_extensions == (".kt", ".kts")
    assert config.strict_parsing is True
    assert config.duplicate_queries is DuplicateQueryPolicy.ERROR


def test_field_names_are_accepted(write_files: WriteFiles) -> None:
    root = write_files({"check.yaml": "root_type: Subscription\n"})

    assert load_check_config(root / "check.yaml").root_type == "Subscription"


@pytest.mark.parametrize("content", ["", "null\n"])
def test_empty_file_means_defaults(write_files: WriteFiles, content: str) -> None:
    root = write_files({"check.yaml": content})

    assert load_check_config(root / "check.yaml") == CheckConfig()


def test_overrides_take_precedence(write_files: WriteFiles) -> None:
    root = write_files({"check.yaml": "rootType: Mutation\nstrictParsing: true\n"})

    config = load_check_config(root / "check.yaml", root_type="Query", strict_parsing=None)

    assert config.root_type == "Query"
    assert config.strict_parsing is True


@pytest.mark.parametrize(
    "content",
    [
        "- not\n- a mapping\n",
        "rootType: Query\nunknownSetting: 1\n",
        "rootType: ''\n",
        "duplicateQueries: keep-last\n",
        "rootType: [unclosed\n",
    ],
)
def test_invalid_config(write_files: WriteFiles, content: str) -> None:
    root = write_files({"check.yaml": content})

    with pytest.raises(InvalidConfigError) as exc_info:
        load_check_config(root / "check.yaml")

    assert isinstance(exc_info.value, ConfigurationError)
    assert exc_info.value.path == root / "check.yaml"


def test_unreadable_config(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError):
        load_check_config(tmp_path / "missing.yaml")


def test_config_is_frozen() -> None:
    config = CheckConfig()

    with pytest.raises(ValueError):
        config.root_type = "Mutation"  # type: ignore[misc]
