"""Tests for shared/repository.py."""

from unittest.mock import MagicMock

import pytest

from shared.repository import BaseRepository


class RowRepository(BaseRepository[dict]):
    def _map_row(self, row):
        return dict(row)

    def get(self, key):
        row = self._select_one(key)
        return self._map_row(row) if row else None


class TestBaseRepository:
    def test_init_stores_client_and_table(self):
        mock_db = MagicMock()
        repo = BaseRepository(mock_db, "users", key_column="user_id")

        assert repo._db is mock_db
        assert repo.table_name == "users"

    def test_select_one_filters_by_key_column(self):
        mock_db = MagicMock()
        query = mock_db.table.return_value.select.return_value
        query.eq.return_value.limit.return_value.execute.return_value.data = [
            {"user_id": "u1", "name": "Asha"}
        ]
        repo = RowRepository(mock_db, "users", key_column="user_id")

        assert repo.get("u1") == {"user_id": "u1", "name": "Asha"}
        mock_db.table.assert_called_with("users")
        query.eq.assert_called_once_with("user_id", "u1")
        query.eq.return_value.limit.assert_called_once_with(1)

    def test_select_one_returns_none_without_rows(self):
        mock_db = MagicMock()
        query = mock_db.table.return_value.select.return_value
        query.eq.return_value.limit.return_value.execute.return_value.data = []
        repo = RowRepository(mock_db, "users")

        assert repo.get("missing") is None

    def test_map_row_must_be_implemented(self):
        repo = BaseRepository(MagicMock(), "users")
        with pytest.raises(NotImplementedError):
            repo._map_row({})
