from graphql import NonNullTypeNode, TypeNode, print_ast

NON_NULL_MARKER = "!"


def is_non_null_type_ref(type_node: TypeNode) -> bool:
    """True when the outermost type carries a non-null marker, e.g. `ID!` or `[ID]!`."""
    return isinstance(type_node, NonNullTypeNode)


def strip_non_null_markers(type_node: TypeNode) -> str:
    """Print a type reference without any non-null marker: `[String!]!` becomes `[String]`."""
    return print_ast(type_node).replace(NON_NULL_MARKER, "")
