from __future__ import annotations

import logging
import os

import psycopg2
from postgrest import APIError
from psycopg2 import sql
from supabase import Client

from src.domain.entities.profile import ProfileRecord
from src.domain.errors import ProfileStoreError
from src.infrastructure.database.postgres_client import PostgresClient

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = ("id", "email", "phone", "display_name", "user_type")


class ProfileRepository:
    """Insert-only access to the user profile table.

    Writes go to local PostgreSQL when a pg client is given, to Supabase when
    a Supabase client is given, and to an in-process dict otherwise.
    """

    def __init__(self, client: Client | None, pg_client: PostgresClient | None = None) -> None:
        self.client = client
        self.pg_client = pg_client
        self.table = os.getenv("PROFILE_TABLE", "user_profiles")
        self._mem: dict[str, ProfileRecord] = {}

    @property
    def backend(self) -> str:
        if self.pg_client is not None:
            return "postgres"
        if self.client is None:
            return "memory"
        return "supabase"

    def _row_to_record(self, row: dict) -> ProfileRecord:
        return ProfileRecord(**{col: row.get(col) for col in PROFILE_COLUMNS})

    def insert(self, record: ProfileRecord) -> ProfileRecord:
        row = record.to_row()

        # PostgreSQL mode
        if self.pg_client is not None:
            query = sql.SQL(
                "INSERT INTO {table} (id, email, phone, display_name, user_type) "
                "VALUES (%s, %s, %s, %s, %s) RETURNING *"
            ).format(table=sql.Identifier(self.table))
            try:
                inserted = self.pg_client.execute_insert(query, tuple(row[c] for c in PROFILE_COLUMNS))
            except psycopg2.Error as exc:
                message = exc.diag.message_primary or str(exc).strip()
                raise ProfileStoreError(message) from exc
            return self._row_to_record(inserted)

        # In-memory mode
        if self.client is None:
            if record.id in self._mem:
                raise ProfileStoreError(
                    f'duplicate key value violates unique constraint "{self.table}_pkey"'
                )
            self._mem[record.id] = record
            return record

        # Supabase mode
        try:
            res = self.client.table(self.table).insert(row).execute()
        except APIError as exc:
            raise ProfileStoreError(exc.message or str(exc)) from exc
        except Exception as exc:
            raise ProfileStoreError(str(exc)) from exc
        if res.data:
            return self._row_to_record(res.data[0])
        return record
