"""Table store contract implemented over a local SQLAlchemy database."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy import Column, Table, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from .database import Base
from .exceptions import TableGatewayError
from .gateway import QueryValue, Record

logger = logging.getLogger(__name__)


class LocalTableGateway:
    """Serves ``read``/``insert``/``update`` with the remote store's response shapes.

    Filter keys that are not columns of the table are ignored, the way the
    remote store ignores its own control parameters. The access token is
    accepted and not checked.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def read(
        self,
        table: str,
        query: Optional[Mapping[str, QueryValue]] = None,
        *,
        access_token: str,
    ) -> list[Record]:
        sql_table, columns = self._resolve(table)
        stmt = select(sql_table)
        for name, value in (query or {}).items():
            if value is None or name not in columns:
                continue
            stmt = stmt.where(columns[name] == value)

        with self._session_factory() as session:
            rows = session.execute(stmt).all()
            return [_row_to_record(row, columns) for row in rows]

    def insert(self, table: str, records: Sequence[Record], *, access_token: str) -> Record:
        from ..models import new_record_id

        sql_table, columns = self._resolve(table)
        inserted: list[Record] = []
        skipped: list[Record] = []

        with self._session_factory() as session:
            for record in records:
                values = {columns[name].key: value for name, value in record.items() if name in columns}
                if not values.get(columns["_id"].key):
                    values[columns["_id"].key] = new_record_id()
                try:
                    session.execute(sql_table.insert().values(values))
                    session.commit()
                except IntegrityError as exc:
                    session.rollback()
                    logger.debug("insert into %s skipped: %s", table, exc.orig)
                    skipped.append({"record": dict(record), "reason": str(exc.orig)})
                    continue
                inserted.append(self._fetch_one(session, sql_table, columns, values[columns["_id"].key]))

        return {"inserted": inserted, "skipped": skipped}

    def update(
        self,
        table: str,
        id_value: str,
        updates: Mapping[str, Any],
        *,
        access_token: str,
        id_column: str = "_id",
    ) -> Record:
        sql_table, columns = self._resolve(table)
        if id_column not in columns:
            raise TableGatewayError(table, 400, f"Unknown id column {id_column}")

        values = {columns[name].key: value for name, value in updates.items() if name in columns}
        with self._session_factory() as session:
            if values:
                result = session.execute(
                    update(sql_table).where(columns[id_column] == id_value).values(values)
                )
                session.commit()
                if result.rowcount == 0:
                    raise TableGatewayError(table, 404, f"Record {id_value} not found")
            rows = session.execute(select(sql_table).where(columns[id_column] == id_value)).all()
            if not rows:
                raise TableGatewayError(table, 404, f"Record {id_value} not found")
            return {"updated": [_row_to_record(rows[0], columns)]}

    def _resolve(self, table: str) -> tuple[Table, dict[str, Column]]:
        sql_table = Base.metadata.tables.get(table)
        if sql_table is None:
            raise TableGatewayError(table, 404, "Table not found")
        return sql_table, {column.name: column for column in sql_table.columns}

    @staticmethod
    def _fetch_one(session: Session, sql_table: Table, columns: dict[str, Column], record_id: str) -> Record:
        row = session.execute(select(sql_table).where(columns["_id"] == record_id)).one()
        return _row_to_record(row, columns)


def _row_to_record(row, columns: dict[str, Column]) -> Record:
    mapping = row._mapping
    return {name: mapping[column] for name, column in columns.items()}
