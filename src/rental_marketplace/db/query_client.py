"""Read-only query client over the relational store.

The client accepts an entity name, optional column filters and shallow
relation embeds, and returns a :class:`FetchResult`. Failures never raise:
they come back as a :class:`FetchError` value so an empty result and a
failed read stay distinguishable.
"""

from __future__ import annotations

import re
import sqlite3
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence

from rental_marketplace.logging_config import get_logger
from rental_marketplace.services.errors import FetchError

Row = dict[str, Any]

MAX_EMBED_DEPTH = 2

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_OPERATORS = {
    "eq": "=",
    "neq": "<>",
    "lt": "<",
    "lte": "<=",
    "gt": ">",
    "gte": ">=",
}


@dataclass(frozen=True)
class Relation:
    """Foreign-key relation available for embedding."""

    table: str
    local_key: str
    remote_key: str
    many: bool = False


RELATIONS: dict[str, dict[str, Relation]] = {
    "users": {
        "rentals": Relation("rentals", "user_id", "renter_id", many=True),
        "products": Relation("products", "user_id", "owner_id", many=True),
    },
    "products": {
        "owner": Relation("users", "owner_id", "user_id"),
        "reviews": Relation("reviews", "product_id", "product_id", many=True),
        "maintenance": Relation("maintenance", "product_id", "product_id", many=True),
        "rentals": Relation("rentals", "product_id", "product_id", many=True),
    },
    "rentals": {
        "renter": Relation("users", "renter_id", "user_id"),
        "product": Relation("products", "product_id", "product_id"),
        "payments": Relation("payments", "rental_id", "rental_id", many=True),
    },
    "reviews": {
        "user": Relation("users", "user_id", "user_id"),
        "product": Relation("products", "product_id", "product_id"),
    },
    "maintenance": {
        "product": Relation("products", "product_id", "product_id"),
    },
    "payments": {
        "rental": Relation("rentals", "rental_id", "rental_id"),
        "user": Relation("users", "user_id", "user_id"),
    },
}


@dataclass(frozen=True)
class Filter:
    column: str
    op: str
    value: Any = None


def eq(column: str, value: Any) -> Filter:
    return Filter(column, "eq", value)


def neq(column: str, value: Any) -> Filter:
    return Filter(column, "neq", value)


def lt(column: str, value: Any) -> Filter:
    return Filter(column, "lt", value)


def lte(column: str, value: Any) -> Filter:
    return Filter(column, "lte", value)


def gt(column: str, value: Any) -> Filter:
    return Filter(column, "gt", value)


def gte(column: str, value: Any) -> Filter:
    return Filter(column, "gte", value)


def in_(column: str, values: Iterable[Any]) -> Filter:
    return Filter(column, "in", tuple(values))


def not_in(column: str, values: Iterable[Any]) -> Filter:
    return Filter(column, "not_in", tuple(values))


def is_null(column: str) -> Filter:
    return Filter(column, "is_null")


def ilike(column: str, term: str) -> Filter:
    """Case-insensitive substring match."""
    return Filter(column, "ilike", term)


@dataclass(frozen=True)
class Embed:
    """Relation to embed into each fetched row.

    ``inner`` drops parent rows whose relation resolves to nothing, the way
    an inner join would.
    """

    name: str
    columns: tuple[str, ...] = ("*",)
    inner: bool = False
    children: tuple["Embed", ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a read: rows on success, an error otherwise."""

    table: str
    rows: Optional[list[Row]] = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __len__(self) -> int:
        return len(self.rows or [])


def first_error(*results: FetchResult) -> Optional[FetchError]:
    """Return the first error among results that must all succeed."""
    for result in results:
        if result.error is not None:
            return result.error
    return None


def parse_embed(spec: str | Embed) -> Embed:
    """Turn ``"product.owner"`` style paths into nested :class:`Embed` values."""
    if isinstance(spec, Embed):
        return spec
    head, _, rest = spec.partition(".")
    if not rest:
        return Embed(head)
    return Embed(head, children=(parse_embed(rest),))


def _merge_embeds(specs: Iterable[str | Embed]) -> list[Embed]:
    merged: dict[str, Embed] = {}
    for spec in specs:
        embed = parse_embed(spec)
        existing = merged.get(embed.name)
        if existing is None:
            merged[embed.name] = embed
            continue
        merged[embed.name] = Embed(
            name=existing.name,
            columns=existing.columns,
            inner=existing.inner or embed.inner,
            children=tuple(_merge_embeds([*existing.children, *embed.children])),
        )
    return list(merged.values())


class QueryClient:
    """Issue filtered reads with shallow relation embedding."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection
        self._connection.row_factory = sqlite3.Row
        self._logger = get_logger(self.__class__.__name__)
        self._columns_cache: dict[str, set[str]] = {}

    def select(
        self,
        table: str,
        columns: Sequence[str] = ("*",),
        *,
        filters: Iterable[Filter] = (),
        embed: Iterable[str | Embed] = (),
        order_by: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> FetchResult:
        """Fetch rows of ``table``.

        ``order_by`` takes a column name, prefixed with ``-`` for
        descending order.
        """
        try:
            embeds = _merge_embeds(embed)
            rows = self._select_rows(
                table,
                columns,
                list(filters),
                order_by,
                limit,
                required_keys=self._embed_keys(table, embeds),
            )
            rows = self._attach(table, rows, embeds, depth=1)
        except sqlite3.Error as exc:
            self._logger.exception("Failed to fetch rows from %s", table)
            return FetchResult(table, error=FetchError(table, str(exc), exc))
        except ValueError as exc:
            self._logger.error("Rejected query on %s: %s", table, exc)
            return FetchResult(table, error=FetchError(table, str(exc), exc))
        return FetchResult(table, rows=rows)

    def _table_columns(self, table: str) -> set[str]:
        if table not in self._columns_cache:
            if not _IDENTIFIER.match(table):
                raise ValueError(f"Invalid table name {table!r}")
            rows = self._connection.execute(f"PRAGMA table_info({table})").fetchall()
            if not rows:
                raise ValueError(f"Unknown table {table!r}")
            self._columns_cache[table] = {row["name"] for row in rows}
        return self._columns_cache[table]

    def _relation(self, table: str, name: str) -> Relation:
        relation = RELATIONS.get(table, {}).get(name)
        if relation is None:
            raise ValueError(f"No relation {name!r} on {table}")
        return relation

    def _embed_keys(self, table: str, embeds: Iterable[Embed]) -> list[str]:
        return [self._relation(table, embed.name).local_key for embed in embeds]

    def _check_column(self, table: str, column: str) -> str:
        if column not in self._table_columns(table):
            raise ValueError(f"Unknown column {table}.{column}")
        return column

    def _projection(self, table: str, columns: Sequence[str], keys: Iterable[str]) -> str:
        if "*" in columns:
            self._table_columns(table)
            return "*"
        wanted = list(dict.fromkeys([*columns, *keys]))
        return ", ".join(self._check_column(table, column) for column in wanted)

    def _where(self, table: str, filters: list[Filter]) -> tuple[str, list[Any]]:
        clauses: list[str] = []
        params: list[Any] = []
        for item in filters:
            column = self._check_column(table, item.column)
            if item.op in _OPERATORS:
                clauses.append(f"{column} {_OPERATORS[item.op]} ?")
                params.append(item.value)
            elif item.op in ("in", "not_in"):
                values = list(item.value)
                if not values:
                    # IN () matches nothing and NOT IN () matches everything
                    clauses.append("0" if item.op == "in" else "1")
                    continue
                placeholders = ", ".join(["?"] * len(values))
                keyword = "IN" if item.op == "in" else "NOT IN"
                clauses.append(f"{column} {keyword} ({placeholders})")
                params.extend(values)
            elif item.op == "is_null":
                clauses.append(f"{column} IS NULL")
            elif item.op == "ilike":
                clauses.append(f"LOWER({column}) LIKE ?")
                params.append(f"%{str(item.value).lower()}%")
            else:
                raise ValueError(f"Unsupported filter operator {item.op!r}")
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        return where, params

    def _select_rows(
        self,
        table: str,
        columns: Sequence[str],
        filters: list[Filter],
        order_by: Optional[str],
        limit: Optional[int],
        required_keys: Iterable[str] = (),
    ) -> list[Row]:
        projection = self._projection(table, columns, required_keys)
        where, params = self._where(table, filters)
        sql = f"SELECT {projection} FROM {table} {where}"
        if order_by:
            descending = order_by.startswith("-")
            column = self._check_column(table, order_by.lstrip("-"))
            sql += f" ORDER BY {column} {'DESC' if descending else 'ASC'}"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(int(limit))
        rows = self._connection.execute(sql, params).fetchall()
        return [dict(row) for row in rows]

    def _attach(self, table: str, rows: list[Row], embeds: list[Embed], depth: int) -> list[Row]:
        if not embeds or not rows:
            return rows
        if depth > MAX_EMBED_DEPTH:
            raise ValueError(f"Embeds deeper than {MAX_EMBED_DEPTH} levels are not supported")
        for embed in embeds:
            relation = self._relation(table, embed.name)
            keys = {row[relation.local_key] for row in rows if row[relation.local_key] is not None}
            related = self._select_rows(
                relation.table,
                embed.columns,
                [in_(relation.remote_key, sorted(keys))],
                None,
                None,
                required_keys=[
                    relation.remote_key,
                    *self._embed_keys(relation.table, embed.children),
                ],
            )
            related = self._attach(relation.table, related, list(embed.children), depth + 1)
            if relation.many:
                grouped: dict[Any, list[Row]] = {}
                for item in related:
                    grouped.setdefault(item[relation.remote_key], []).append(item)
                for row in rows:
                    row[embed.name] = grouped.get(row[relation.local_key], [])
            else:
                by_key = {item[relation.remote_key]: item for item in related}
                for row in rows:
                    row[embed.name] = by_key.get(row[relation.local_key])
            if embed.inner:
                rows = [row for row in rows if row[embed.name]]
        return rows
