"""Persistence-only repository base for the Chirpy aggregates.

Repositories read and write rows through the session they are handed; they
never commit, roll back, hash passwords or mint tokens. Sorting, filtering
and updates go through per-repository whitelists so request input can never
name an arbitrary column.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, and_, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from chirpy.core.extensions import db

E = TypeVar("E")  # mapped entity


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Turn ``["-created_at", "email"]`` into ``[("created_at", True), ("email", False)]``.

    Blank tokens are dropped.
    """
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        name = token.lstrip("-").strip()
        if name:
            parsed.append((name, token.startswith("-")))
    return parsed


def apply_sorting(
    stmt: Select[Any],
    sortable: Mapping[str, InstrumentedAttribute[Any]],
    tokens: Iterable[str],
    *,
    pk_attr: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """Add ``ORDER BY`` for whitelisted tokens, then the primary key ascending.

    :param stmt: Select to extend.
    :param sortable: Public name to column mapping.
    :param tokens: Public sort tokens; unknown names are ignored.
    :param pk_attr: Tiebreaker so rows with equal sort keys keep a stable order.
    :returns: The ordered select.
    """
    orders: list[Any] = []
    for name, desc in parse_sort_tokens(tokens):
        col = sortable.get(name)
        if col is not None:
            orders.append(col.desc() if desc else col.asc())
    if pk_attr is not None:
        orders.append(pk_attr.asc())
    return stmt.order_by(*orders) if orders else stmt


class BaseRepository(Generic[E]):
    """Generic repository over one mapped class (``model``).

    Subclasses set ``model`` and may override the whitelist hooks
    ``_sortable_fields``, ``_filterable_fields`` and ``_updatable_fields``.
    """

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """
        :param session: Session shared by the Unit of Work. Defaults to the
            Flask-scoped ``db.session``.
        """
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ---------------------------- Whitelist hooks ----------------------------

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _updatable_fields(self) -> set[str]:
        return set()

    # ------------------------------ Reads ------------------------------------

    def get(self, entity_id: Any) -> E | None:
        """Return the row with this primary key, or ``None``."""
        return self.session.get(self.model, entity_id)

    def list(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: Iterable[str] | None = None,
        limit: int | None = None,
    ) -> list[E]:
        """List rows matching equality ``filters`` in ``sort`` order.

        Filter keys outside the whitelist and ``None`` values are skipped, so
        ``filters={"user_id": None}`` means "no author filter".

        :param filters: Public field to value mapping.
        :param sort: Public sort tokens, ``-`` prefix for descending.
        :param limit: Optional row cap.
        """
        allowed = self._filterable_fields()
        clauses = [
            allowed[key] == value
            for key, value in (filters or {}).items()
            if value is not None and key in allowed
        ]
        stmt: Select[Any] = select(self.model)
        if clauses:
            stmt = stmt.where(and_(*clauses))
        stmt = apply_sorting(stmt, self._sortable_fields(), sort or [], pk_attr=self._pk_attr())
        if limit is not None:
            stmt = stmt.limit(int(limit))
        return list(self.session.execute(stmt).scalars().all())

    # ------------------------------ Writes -----------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so defaults (ids, timestamps) are populated."""
        self.session.add(instance)
        self.flush()
        return instance

    def update(self, instance: E, **fields: Any) -> E:
        """Assign whitelisted ``fields`` on ``instance`` and flush.

        Assignment goes through ``setattr`` so model ``@validates`` hooks run
        (e.g. email normalisation).

        :raises ValueError: If any key is not updatable for this repository.
        """
        unknown = sorted(set(fields) - self._updatable_fields())
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        for key, value in fields.items():
            setattr(instance, key, value)
        self.flush()
        return instance

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()
