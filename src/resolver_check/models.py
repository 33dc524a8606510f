from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType


@dataclass(frozen=True)
class Argument:
    name: str
    value_type: str  # printed type without non-null markers, e.g. "ID" or "[String]"
    is_nullable: bool


@dataclass(frozen=True)
class SchemaQuery:
    name: str
    arguments: tuple[Argument, ...] = ()


@dataclass(frozen=True)
class SchemaModel:
    """Queries of the configured root type together with the declared custom scalars."""

    queries: tuple[SchemaQuery, ...]
    custom_scalars: frozenset[str]
    files: tuple[Path, ...] = ()

    @property
    def query_names(self) -> tuple[str, ...]:
        return tuple(query.name for query in self.queries)


@dataclass(frozen=True)
class FieldSymbol:
    name: str
    declared_type: str


@dataclass(frozen=True)
class ClassSymbol:
    qualified_name: str
    fields: tuple[FieldSymbol, ...] = ()

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class SourceFile:
    path: Path
    package_name: str
    classes: tuple[ClassSymbol, ...] = ()


@dataclass(frozen=True)
class ResolverBinding:
    root_type: str
    field_name: str
    # diagnostics only, never compared when matching
    function_name: str | None = field(default=None, compare=False)
    path: Path | None = field(default=None, compare=False)


@dataclass(frozen=True)
class SourceModel:
    """Symbols recovered from a source tree.

    `classes` maps qualified class names to the first declaration seen under
    that name. `bindings` holds at most one binding per field name per root
    type.
    """

    files: tuple[SourceFile, ...]
    classes: Mapping[str, ClassSymbol]
    bindings: tuple[ResolverBinding, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "classes", MappingProxyType(dict(self.classes)))

    def field_names(self, root_type: str) -> frozenset[str]:
        return frozenset(binding.field_name for binding in self.bindings if binding.root_type == root_type)


class MismatchKind(str, Enum):
    MISSING_QUERY_RESOLVER = "missing-query-resolver"


@dataclass(frozen=True)
class MismatchRecord:
    query_name: str
    kind: MismatchKind = MismatchKind.MISSING_QUERY_RESOLVER


@dataclass(frozen=True)
class CoverageReport:
    root_type: str
    schema: SchemaModel
    source: SourceModel
    mismatches: tuple[MismatchRecord, ...]

    @property
    def is_covered(self) -> bool:
        return not self.mismatches
