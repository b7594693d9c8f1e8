"""Tests for the Supabase client factory."""

import pytest
from unittest.mock import patch, MagicMock

from shared.database import get_supabase_client, reset_client_cache


@pytest.fixture(autouse=True)
def reset_client():
    reset_client_cache()
    yield
    reset_client_cache()


class TestGetSupabaseClient:
    @patch("shared.database.get_settings")
    def test_missing_configuration_raises(self, mock_settings):
        mock_settings.return_value.supabase_url = ""
        mock_settings.return_value.supabase_service_role_key = ""
        with pytest.raises(RuntimeError, match="Supabase configuration missing"):
            get_supabase_client()

    @patch("shared.database.create_client")
    @patch("shared.database.get_settings")
    def test_client_is_cached(self, mock_settings, mock_create):
        mock_settings.return_value.supabase_url = "https://example.supabase.co"
        mock_settings.return_value.supabase_service_role_key = "service-key"
        mock_create.return_value = MagicMock()

        first = get_supabase_client()
        second = get_supabase_client()

        assert first is second
        mock_create.assert_called_once_with("https://example.supabase.co", "service-key")
