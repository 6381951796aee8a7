"""Tests for shared/database.py."""

import pytest
from unittest.mock import patch, MagicMock

from shared.database import (
    get_connection_pool,
    close_connection_pool,
    reset_pool_cache,
)


class TestConnectionPool:
    @patch("shared.database.ThreadedConnectionPool")
    @patch("shared.database.get_settings")
    def test_creates_pool_from_settings(self, mock_settings, mock_pool_cls):
        """Should build the pool with configured sizes and DSN."""
        mock_settings.return_value.database_url = "postgresql://localhost/users"
        mock_settings.return_value.db_pool_min_size = 2
        mock_settings.return_value.db_pool_max_size = 5

        pool = get_connection_pool()

        mock_pool_cls.assert_called_once_with(2, 5, dsn="postgresql://localhost/users")
        assert pool is mock_pool_cls.return_value

    @patch("shared.database.ThreadedConnectionPool")
    @patch("shared.database.get_settings")
    def test_caches_pool(self, mock_settings, mock_pool_cls):
        """Should create the pool only once."""
        mock_settings.return_value.database_url = "postgresql://localhost/users"

        pool1 = get_connection_pool()
        pool2 = get_connection_pool()

        mock_pool_cls.assert_called_once()
        assert pool1 is pool2

    @patch("shared.database.get_settings")
    def test_raises_without_database_url(self, mock_settings):
        """Should raise if configuration is missing."""
        mock_settings.return_value.database_url = ""

        with pytest.raises(RuntimeError, match="configuration missing"):
            get_connection_pool()


class TestPoolLifecycle:
    @patch("shared.database.ThreadedConnectionPool")
    @patch("shared.database.get_settings")
    def test_close_connection_pool(self, mock_settings, mock_pool_cls):
        """Closing releases every connection and forgets the pool."""
        mock_settings.return_value.database_url = "postgresql://localhost/users"
        mock_pool_cls.side_effect = [MagicMock(name="pool1"), MagicMock(name="pool2")]

        pool1 = get_connection_pool()
        close_connection_pool()
        pool2 = get_connection_pool()

        pool1.closeall.assert_called_once()
        assert pool1 is not pool2

    def test_close_without_pool_is_noop(self):
        """Closing before any pool exists does nothing."""
        close_connection_pool()

    @patch("shared.database.ThreadedConnectionPool")
    @patch("shared.database.get_settings")
    def test_reset_pool_cache(self, mock_settings, mock_pool_cls):
        """Reset forgets the pool without closing it."""
        mock_settings.return_value.database_url = "postgresql://localhost/users"
        mock_pool_cls.side_effect = [MagicMock(name="pool1"), MagicMock(name="pool2")]

        pool1 = get_connection_pool()
        reset_pool_cache()
        pool2 = get_connection_pool()

        assert mock_pool_cls.call_count == 2
        pool1.closeall.assert_not_called()
        assert pool1 is not pool2
