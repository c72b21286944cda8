"""
Parameterized statement builder keyed by table metadata.

Every identifier that reaches SQL text comes from a ``TableSpec`` (validated
when the table is declared) or is checked against the table's column list.
Values are always bound as ``$n`` parameters.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from ..core.exceptions import InvalidIdentifierNameError
from ..core.value_objects import PageWindow


_IDENTIFIER = re.compile(r'^[a-z_][a-z0-9_]*$')


def validate_identifier(name: str) -> str:
    """Return ``name`` if it is a safe, lowercase SQL identifier."""
    if not isinstance(name, str) or not _IDENTIFIER.match(name) or len(name) > 63:
        raise InvalidIdentifierNameError(name)
    return name


class SortOrder(str, Enum):
    """Sort order enumeration."""
    ASC = "asc"
    DESC = "desc"

    def to_sql(self) -> str:
        """Convert to SQL ORDER BY keyword."""
        return "ASC" if self == SortOrder.ASC else "DESC"


@dataclass(frozen=True)
class TableSpec:
    """Metadata describing one table: where it lives and which columns it has."""

    schema: str
    name: str
    columns: Tuple[str, ...]

    def __post_init__(self):
        validate_identifier(self.schema)
        validate_identifier(self.name)
        if not self.columns:
            raise ValueError(f"Table {self.name} must declare at least one column")
        for column in self.columns:
            validate_identifier(column)

    @property
    def qualified_name(self) -> str:
        return f"{self.schema}.{self.name}"

    def column(self, name: str) -> str:
        """Return ``name`` if it is one of this table's columns."""
        if name not in self.columns:
            raise ValueError(f"Unknown column '{name}' for table {self.qualified_name}")
        return name

    def column_list(self, names: Optional[Sequence[str]] = None, alias: Optional[str] = None) -> str:
        """Comma-separated column list, optionally qualified with a table alias."""
        selected = [self.column(n) for n in names] if names else list(self.columns)
        if alias:
            validate_identifier(alias)
            return ", ".join(f"{alias}.{c}" for c in selected)
        return ", ".join(selected)


@dataclass(frozen=True)
class Statement:
    """SQL text plus its positional arguments."""

    sql: str
    args: Tuple[Any, ...] = field(default_factory=tuple)


class StatementBuilder:
    """Builds single-statement CRUD queries for one table."""

    def __init__(self, table: TableSpec):
        self.table = table

    def _where(self, where: Mapping[str, Any], start: int = 1) -> Tuple[str, List[Any]]:
        conditions = []
        params: List[Any] = []
        index = start
        for column, value in where.items():
            self.table.column(column)
            if value is None:
                conditions.append(f"{column} IS NULL")
                continue
            conditions.append(f"{column} = ${index}")
            params.append(value)
            index += 1
        clause = "WHERE " + " AND ".join(conditions) if conditions else ""
        return clause, params

    def _order_by(self, order_by: Sequence[Tuple[str, SortOrder]]) -> str:
        if not order_by:
            return ""
        parts = [f"{self.table.column(c)} {SortOrder(o).to_sql()}" for c, o in order_by]
        return "ORDER BY " + ", ".join(parts)

    def insert(
        self,
        values: Mapping[str, Any],
        *,
        on_conflict_do_nothing: bool = False,
        returning: Sequence[str] = ()
    ) -> Statement:
        """INSERT one row; optionally ignore uniqueness conflicts."""
        if not values:
            raise ValueError("Insert values cannot be empty")
        columns = [self.table.column(c) for c in values]
        placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
        sql = (
            f"INSERT INTO {self.table.qualified_name} ({', '.join(columns)}) "
            f"VALUES ({placeholders})"
        )
        if on_conflict_do_nothing:
            sql += " ON CONFLICT DO NOTHING"
        if returning:
            sql += f" RETURNING {self.table.column_list(returning)}"
        return Statement(sql, tuple(values.values()))

    def select(
        self,
        where: Optional[Mapping[str, Any]] = None,
        *,
        columns: Optional[Sequence[str]] = None,
        order_by: Sequence[Tuple[str, SortOrder]] = (),
        window: Optional[PageWindow] = None,
        limit: Optional[int] = None
    ) -> Statement:
        """SELECT with equality filters, ordering and an optional page window."""
        clause, params = self._where(where or {})
        parts = [f"SELECT {self.table.column_list(columns)} FROM {self.table.qualified_name}"]
        if clause:
            parts.append(clause)
        order = self._order_by(order_by)
        if order:
            parts.append(order)
        if window is not None:
            parts.append(f"LIMIT ${len(params) + 1} OFFSET ${len(params) + 2}")
            params.extend([window.limit, window.offset])
        elif limit is not None:
            parts.append(f"LIMIT ${len(params) + 1}")
            params.append(limit)
        return Statement(" ".join(parts), tuple(params))

    def exists(self, where: Mapping[str, Any]) -> Statement:
        """SELECT EXISTS(...) for the given equality filters."""
        clause, params = self._where(where)
        return Statement(
            f"SELECT EXISTS (SELECT 1 FROM {self.table.qualified_name} {clause})",
            tuple(params),
        )

    def count(self, where: Optional[Mapping[str, Any]] = None) -> Statement:
        """SELECT COUNT(*) for the given equality filters."""
        clause, params = self._where(where or {})
        sql = f"SELECT COUNT(*) FROM {self.table.qualified_name}"
        if clause:
            sql += f" {clause}"
        return Statement(sql, tuple(params))

    def update(
        self,
        values: Mapping[str, Any],
        where: Mapping[str, Any],
        *,
        touch: Optional[str] = None
    ) -> Statement:
        """UPDATE rows matching ``where``; ``touch`` names a column set to NOW()."""
        if not values:
            raise ValueError("Update values cannot be empty")
        if not where:
            raise ValueError("Refusing to build an UPDATE without a WHERE clause")
        assignments = [f"{self.table.column(c)} = ${i}" for i, c in enumerate(values, start=1)]
        if touch:
            assignments.append(f"{self.table.column(touch)} = NOW()")
        clause, params = self._where(where, start=len(values) + 1)
        sql = f"UPDATE {self.table.qualified_name} SET {', '.join(assignments)} {clause}"
        return Statement(sql, tuple(values.values()) + tuple(params))

    def delete(self, where: Mapping[str, Any]) -> Statement:
        """DELETE rows matching ``where``."""
        if not where:
            raise ValueError("Refusing to build a DELETE without a WHERE clause")
        clause, params = self._where(where)
        return Statement(f"DELETE FROM {self.table.qualified_name} {clause}", tuple(params))


