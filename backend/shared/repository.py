"""
Base repository class for Supabase table access.

Stores built on Supabase share a client, a table name and the mapping
between database rows and pydantic models.
"""

from typing import Any, Generic, Optional, TypeVar

from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for table-backed repositories.

    Subclasses set the table through the constructor and implement
    ``_map_row`` to turn a database row into their model.

    Example:
        class ProfileRepository(BaseRepository[Profile]):
            def _map_row(self, row):
                return Profile.model_validate(row)
    """

    def __init__(self, db: Client, table: str, key_column: str = "id") -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
            table: Name of the table this repository reads and writes.
            key_column: Column holding the primary key.
        """
        self._db = db
        self._table_name = table
        self._key_column = key_column

    @property
    def table_name(self) -> str:
        return self._table_name

    def _table(self):
        return self._db.table(self._table_name)

    def _select_one(self, key: str, columns: str = "*") -> Optional[dict[str, Any]]:
        """Fetch the row with the given key, or None."""
        result = (
            self._table()
            .select(columns)
            .eq(self._key_column, key)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return result.data[0]

    def _map_row(self, row: dict[str, Any]) -> T:
        raise NotImplementedError
