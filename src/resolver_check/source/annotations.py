"""Reading Kotlin annotations attached to declarations.

An annotation such as

    @SchemaMapping(typeName = "Query", field = "employee")

is read into `Annotation(name="SchemaMapping", arguments={"typeName": "Query",
"field": "employee"})`. Positional arguments are stored under "value", the
name Java annotations use for their single unnamed element.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from tree_sitter import Node

from resolver_check.source.parser import children_of_type, first_child_of_type, node_text

POSITIONAL_ARGUMENT = "value"

# Used only when the parser attaches no annotation node to a declaration.
SCHEMA_MAPPING_PATTERN = re.compile(
    r'@SchemaMapping\s*\(\s*typeName\s*=\s*"([^"]+)"\s*,\s*field\s*=\s*"([^"]+)"\s*\)'
)


@dataclass(frozen=True)
class Annotation:
    name: str
    arguments: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", MappingProxyType(dict(self.arguments)))

    def get(self, *keys: str) -> str | None:
        """First non-empty argument among keys."""
        for key in keys:
            value = self.arguments.get(key)
            if value:
                return value
        return None


def _literal_value(expression: Node) -> str:
    text = node_text(expression).strip()
    for quote in ('"""', '"'):
        if len(text) >= 2 * len(quote) and text.startswith(quote) and text.endswith(quote):
            return text[len(quote) : -len(quote)]
    return text


def _read_value_arguments(value_arguments: Node) -> dict[str, str]:
    arguments: dict[str, str] = {}
    for argument in children_of_type(value_arguments, "value_argument"):
        children = [child for child in argument.children if child.type != "annotation"]
        separator = next((index for index, child in enumerate(children) if child.type == "="), None)
        # soft keywords such as `field` may come out of the grammar as anonymous tokens
        if separator is None:
            key, value_nodes = POSITIONAL_ARGUMENT, children
        else:
            key = "".join(node_text(child) for child in children[:separator]).strip()
            value_nodes = children[separator + 1 :]
        value_nodes = [child for child in value_nodes if child.type != "*"]
        if not key or not value_nodes:
            continue
        arguments.setdefault(key, _literal_value(value_nodes[-1]))
    return arguments


def read_annotation(node: Node) -> Annotation | None:
    """Read a single `annotation` node into its name and arguments."""
    invocation = first_child_of_type(node, "constructor_invocation")
    type_node = first_child_of_type(invocation if invocation is not None else node, "user_type")
    if type_node is None:
        return None

    # `@org.springframework.graphql.data.method.annotation.SchemaMapping` reads as "SchemaMapping"
    name = node_text(type_node).rsplit(".", 1)[-1].strip()
    arguments: dict[str, str] = {}
    if invocation is not None:
        value_arguments = first_child_of_type(invocation, "value_arguments")
        if value_arguments is not None:
            arguments = _read_value_arguments(value_arguments)
    return Annotation(name=name, arguments=arguments)


def read_declaration_annotations(declaration: Node) -> dict[str, Annotation]:
    """Annotations attached to a class or function declaration, keyed by simple name.

    Only the declaration's own modifiers are inspected, so parameter
    annotations such as `@Argument` never show up here. The first occurrence
    of a repeated annotation wins.
    """
    annotations: dict[str, Annotation] = {}
    annotation_nodes = list(children_of_type(declaration, "annotation"))
    for modifiers in children_of_type(declaration, "modifiers"):
        annotation_nodes.extend(children_of_type(modifiers, "annotation"))

    for annotation_node in annotation_nodes:
        annotation = read_annotation(annotation_node)
        if annotation is not None:
            annotations.setdefault(annotation.name, annotation)
    return annotations


def match_schema_mapping_text(declaration: Node) -> Annotation | None:
    """Recover `@SchemaMapping(typeName = ..., field = ...)` from the declaration text."""
    match = SCHEMA_MAPPING_PATTERN.search(node_text(declaration))
    if match is None:
        return None
    return Annotation(name="SchemaMapping", arguments={"typeName": match.group(1), "field": match.group(2)})
