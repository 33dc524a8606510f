from collections.abc import Iterable, Iterator
from pathlib import Path

from graphql import (
    FieldDefinitionNode,
    InputValueDefinitionNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
)

from resolver_check import log
from resolver_check.config import CheckConfig, DuplicateQueryPolicy
from resolver_check.errors import DuplicateQueryError
from resolver_check.models import Argument, SchemaModel, SchemaQuery
from resolver_check.schema.loader import SchemaDocument, load_schema_documents
from resolver_check.schema.type_refs import is_non_null_type_ref, strip_non_null_markers


def extract_custom_scalars(documents: Iterable[SchemaDocument]) -> frozenset[str]:
    """Names of all scalar types declared anywhere in the documents."""
    return frozenset(
        definition.name.value
        for schema_document in documents
        for definition in schema_document.document.definitions
        if isinstance(definition, ScalarTypeDefinitionNode)
    )


def build_argument(argument: InputValueDefinitionNode) -> Argument:
    return Argument(
        name=argument.name.value,
        value_type=strip_non_null_markers(argument.type),
        is_nullable=not is_non_null_type_ref(argument.type),
    )


def build_query(field: FieldDefinitionNode) -> SchemaQuery:
    return SchemaQuery(
        name=field.name.value,
        arguments=tuple(build_argument(argument) for argument in field.arguments or ()),
    )


def iter_root_fields(schema_document: SchemaDocument, root_type: str) -> Iterator[FieldDefinitionNode]:
    """Fields of the root type in declaration order, including `extend type` blocks."""
    for definition in schema_document.document.definitions:
        if not isinstance(definition, (ObjectTypeDefinitionNode, ObjectTypeExtensionNode)):
            continue
        if definition.name.value != root_type:
            continue
        yield from definition.fields or ()


def extract_queries(
    documents: Iterable[SchemaDocument],
    root_type: str,
    duplicate_policy: DuplicateQueryPolicy = DuplicateQueryPolicy.KEEP_FIRST,
) -> list[SchemaQuery]:
    """Build one query per root-type field, applying the duplicate policy across files.

    Raises:
        DuplicateQueryError: If a field name repeats and the policy is ERROR
    """
    queries: list[SchemaQuery] = []
    seen: dict[str, Path] = {}

    for schema_document in documents:
        for field in iter_root_fields(schema_document, root_type):
            query = build_query(field)
            if query.name in seen:
                if duplicate_policy is DuplicateQueryPolicy.ERROR:
                    raise DuplicateQueryError(query.name, schema_document.path)
                if duplicate_policy is DuplicateQueryPolicy.KEEP_FIRST:
                    log.warning(
                        f"Ignoring duplicate {root_type}.{query.name} in {schema_document.path}, "
                        f"first declared in {seen[query.name]}"
                    )
                    continue
            else:
                seen[query.name] = schema_document.path
            queries.append(query)

    return queries


def drop_custom_scalar_arguments(queries: Iterable[SchemaQuery], custom_scalars: frozenset[str]) -> list[SchemaQuery]:
    """Remove arguments typed with a custom scalar; those are treated as opaque."""
    return [
        SchemaQuery(
            name=query.name,
            arguments=tuple(argument for argument in query.arguments if argument.value_type not in custom_scalars),
        )
        for query in queries
    ]


def extract_schema(schema_dir: Path, config: CheckConfig | None = None) -> SchemaModel:
    """Extract the root-type queries and custom scalars declared under schema_dir.

    Args:
        schema_dir: Directory holding GraphQL SDL files, searched recursively
        config: Check settings; defaults are used when omitted

    Returns:
        SchemaModel with queries in file order, then declaration order

    Raises:
        ConfigurationError: If schema_dir is not a directory
        NoSchemaFilesError: If schema_dir holds no schema file
        SchemaReadError: If a schema file cannot be read
        SchemaParseError: If a schema file is not valid SDL
        DuplicateQueryError: If duplicates are rejected and one is found
    """
    config = config or CheckConfig()
    documents = load_schema_documents(schema_dir, config.schema_suffixes)

    custom_scalars = extract_custom_scalars(documents)
    queries = extract_queries(documents, config.root_type, config.duplicate_queries)
    queries = drop_custom_scalar_arguments(queries, custom_scalars)

    log.info(f"Found {len(queries)} {config.root_type} field(s) and {len(custom_scalars)} custom scalar(s)")
    return SchemaModel(
        queries=tuple(queries),
        custom_scalars=custom_scalars,
        files=tuple(schema_document.path for schema_document in documents),
    )
