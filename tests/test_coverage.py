import pytest

from resolver_check.coverage import find_missing_resolvers
from resolver_check.models import MismatchKind, MismatchRecord, SchemaQuery


@pytest.mark.parametrize(
    "queries,resolvers,expected",
    [
        (["employee", "searchEmployee"], {"employee"}, ["searchEmployee"]),
        (["employee"], {"employee", "searchEmployee"}, []),
        (["employee", "searchEmployee"], set(), ["employee", "searchEmployee"]),
        ([], {"employee"}, []),
        (["c", "a", "b"], {"a"}, ["c", "b"]),
    ],
)
def test_find_missing_resolvers(queries: list[str], resolvers: set[str], expected: list[str]) -> None:
    mismatches = find_missing_resolvers(queries, frozenset(resolvers))

    assert mismatches == tuple(MismatchRecord(query_name=name) for name in expected)


def test_accepts_schema_queries() -> None:
    queries = [SchemaQuery(name="employee"), SchemaQuery(name="searchEmployee")]

    (mismatch,) = find_missing_resolvers(queries, {"employee"})

    assert mismatch.query_name == "searchEmployee"
    assert mismatch.kind is MismatchKind.MISSING_QUERY_RESOLVER


def test_duplicate_queries_are_reported_per_occurrence() -> None:
    mismatches = find_missing_resolvers(["employee", "employee"], frozenset())

    assert [mismatch.query_name for mismatch in mismatches] == ["employee", "employee"]
