from dataclasses import dataclass
from pathlib import Path

from tree_sitter import Node, Tree

from resolver_check import log
from resolver_check.config import CheckConfig
from resolver_check.discovery import find_files, require_directory
from resolver_check.errors import InvalidSourceDirectoryError
from resolver_check.models import ClassSymbol, FieldSymbol, ResolverBinding, SourceFile, SourceModel
from resolver_check.source.annotations import (
    POSITIONAL_ARGUMENT,
    Annotation,
    match_schema_mapping_text,
    read_declaration_annotations,
)
from resolver_check.source.parser import (
    children_of_type,
    enclosing_node_of_type,
    first_child_of_type,
    node_text,
    parse_source_file,
    walk_tree,
)

SCHEMA_MAPPING = "SchemaMapping"
# Spring for GraphQL shortcuts with an implied type name
ROOT_TYPE_MAPPINGS = {
    "QueryMapping": "Query",
    "MutationMapping": "Mutation",
    "SubscriptionMapping": "Subscription",
}
MUTABILITY_KEYWORDS = ("val", "var")


@dataclass(frozen=True)
class FileSymbols:
    """Everything recovered from one parsed file, before any cross-file deduplication."""

    source_file: SourceFile
    bindings: tuple[ResolverBinding, ...]


def extract_package_name(tree: Tree) -> str:
    """Name from the package header; the last header wins if there are several."""
    package_name = ""
    for header in children_of_type(tree.root_node, "package_header"):
        name_node = next((child for child in header.named_children if "comment" not in child.type), None)
        package_name = node_text(name_node).strip().rstrip(";").strip()
    return package_name


def qualify(package_name: str, simple_name: str) -> str:
    return f"{package_name}.{simple_name}" if package_name else simple_name


def extract_field(parameter: Node) -> FieldSymbol | None:
    """Split a primary-constructor parameter `val name: Type = default` into name and type."""
    colon = next((index for index, child in enumerate(parameter.children) if child.type == ":"), None)
    if colon is None:
        return None

    name_parts = [
        node_text(child)
        for child in parameter.children[:colon]
        if child.type not in ("modifiers", "binding_pattern_kind", *MUTABILITY_KEYWORDS)
    ]
    name = " ".join(name_parts).strip()
    for keyword in MUTABILITY_KEYWORDS:
        name = name.removeprefix(f"{keyword} ").strip()

    type_parts: list[str] = []
    for child in parameter.children[colon + 1 :]:
        if child.type == "=":
            break
        type_parts.append(node_text(child))
    declared_type = "".join(type_parts).strip()

    if not name or not declared_type:
        return None
    return FieldSymbol(name=name, declared_type=declared_type)


def extract_class(declaration: Node, package_name: str) -> ClassSymbol | None:
    name_node = first_child_of_type(declaration, "type_identifier")
    if name_node is None:
        return None

    fields: list[FieldSymbol] = []
    constructor = first_child_of_type(declaration, "primary_constructor")
    if constructor is not None:
        for node in walk_tree(constructor):
            if node.type == "class_parameter":
                field = extract_field(node)
                if field is not None:
                    fields.append(field)

    return ClassSymbol(qualified_name=qualify(package_name, node_text(name_node)), fields=tuple(fields))


def extract_classes(tree: Tree, package_name: str) -> list[ClassSymbol]:
    classes: list[ClassSymbol] = []
    for node in walk_tree(tree.root_node):
        if node.type == "class_declaration":
            class_symbol = extract_class(node, package_name)
            if class_symbol is not None:
                classes.append(class_symbol)
    return classes


def function_name(declaration: Node) -> str | None:
    name_node = first_child_of_type(declaration, "simple_identifier")
    return node_text(name_node) or None


def _class_level_type_name(declaration: Node) -> str | None:
    """`typeName` of a `@SchemaMapping` placed on the class enclosing the function."""
    class_node = enclosing_node_of_type(declaration, "class_declaration")
    if class_node is None:
        return None
    annotation = read_declaration_annotations(class_node).get(SCHEMA_MAPPING)
    return annotation.get("typeName") if annotation else None


def resolve_binding(declaration: Node, path: Path | None = None) -> ResolverBinding | None:
    """Binding declared by a function's mapping annotation, or None for non-resolvers.

    `@SchemaMapping(typeName = T, field = F)` binds (T, F). Without a typeName
    the class-level `@SchemaMapping` supplies it; without a field the function
    name is used. `@QueryMapping` and its siblings imply the type name.
    """
    name = function_name(declaration)
    annotations = read_declaration_annotations(declaration)

    annotation: Annotation | None = None
    type_name: str | None = None
    for annotation_name, implied_type in ROOT_TYPE_MAPPINGS.items():
        if annotation_name in annotations:
            annotation = annotations[annotation_name]
            type_name = implied_type
            field_name = annotation.get("name", "field", POSITIONAL_ARGUMENT)
            break
    else:
        annotation = annotations.get(SCHEMA_MAPPING)
        if annotation is None and not annotations:
            annotation = match_schema_mapping_text(declaration)
        if annotation is None:
            return None
        type_name = annotation.get("typeName") or _class_level_type_name(declaration)
        field_name = annotation.get("field", POSITIONAL_ARGUMENT)

    field_name = field_name or name
    if not type_name or not field_name:
        log.debug(f"Skipping @{annotation.name} on {name} in {path}: cannot determine type and field")
        return None

    log.debug(f"Function {name} in {path} resolves {type_name}.{field_name}")
    return ResolverBinding(root_type=type_name, field_name=field_name, function_name=name, path=path)


def extract_bindings(tree: Tree, path: Path | None = None) -> list[ResolverBinding]:
    """Bindings of every function declaration in the tree, regardless of class nesting."""
    bindings: list[ResolverBinding] = []
    for node in walk_tree(tree.root_node):
        if node.type == "function_declaration":
            binding = resolve_binding(node, path)
            if binding is not None:
                bindings.append(binding)
    return bindings


def extract_file_symbols(path: Path, config: CheckConfig) -> FileSymbols:
    tree = parse_source_file(path, strict=config.strict_parsing)
    package_name = extract_package_name(tree)
    source_file = SourceFile(
        path=path,
        package_name=package_name,
        classes=tuple(extract_classes(tree, package_name)),
    )
    return FileSymbols(source_file=source_file, bindings=tuple(extract_bindings(tree, path)))


def extract_source(source_dir: Path, config: CheckConfig | None = None) -> SourceModel:
    """Extract class metadata and resolver bindings for the configured root type.

    Files are processed in sorted path order. The first class registered under a
    qualified name and the first binding for a field name win; later ones are
    dropped.

    Args:
        source_dir: Directory holding Kotlin sources, searched recursively
        config: Check settings; defaults are used when omitted

    Returns:
        SourceModel with one SourceFile per parsed file

    Raises:
        InvalidSourceDirectoryError: If source_dir is not a directory
        SourceReadError: If a source file cannot be read
        SourceParseError: If a source file cannot be parsed
    """
    config = config or CheckConfig()
    require_directory(source_dir, InvalidSourceDirectoryError, "Source")

    source_paths = find_files(source_dir, config.source_extensions)
    log.info(f"Parsing {len(source_paths)} source file(s) from {source_dir}")

    files: list[SourceFile] = []
    classes: dict[str, ClassSymbol] = {}
    bindings: dict[str, ResolverBinding] = {}

    for path in source_paths:
        symbols = extract_file_symbols(path, config)
        files.append(symbols.source_file)

        for class_symbol in symbols.source_file.classes:
            if class_symbol.qualified_name in classes:
                log.debug(f"Skipping duplicate class {class_symbol.qualified_name} in {path}")
                continue
            classes[class_symbol.qualified_name] = class_symbol

        for binding in symbols.bindings:
            if binding.root_type != config.root_type:
                continue
            if binding.field_name in bindings:
                first = bindings[binding.field_name]
                log.debug(
                    f"Ignoring second resolver for {binding.root_type}.{binding.field_name} "
                    f"({binding.function_name} in {path}), first bound by {first.function_name} in {first.path}"
                )
                continue
            bindings[binding.field_name] = binding

    log.info(f"Found {len(bindings)} {config.root_type} resolver(s) and {len(classes)} class(es)")
    return SourceModel(files=tuple(files), classes=classes, bindings=tuple(bindings.values()))
