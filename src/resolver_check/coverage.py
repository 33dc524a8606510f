"""Matching schema queries against bound resolvers."""

from collections.abc import Iterable, Set

from resolver_check.models import MismatchRecord, SchemaQuery


def find_missing_resolvers(
    queries: Iterable[SchemaQuery | str], resolver_field_names: Set[str]
) -> tuple[MismatchRecord, ...]:
    """Report every query without a bound resolver, in schema declaration order.

    The check is one-sided: resolvers bound to fields the schema does not
    declare are never reported. An empty result means full coverage.

    Args:
        queries: Schema queries, or just their names
        resolver_field_names: Field names bound by resolvers of the same root type

    Returns:
        One MismatchRecord per uncovered query
    """
    names = (query.name if isinstance(query, SchemaQuery) else query for query in queries)
    return tuple(MismatchRecord(query_name=name) for name in names if name not in resolver_field_names)
