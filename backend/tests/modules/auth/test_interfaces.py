from unittest.mock import MagicMock

from modules.auth.interfaces import IAuthService, ISessionSource
from modules.auth.service import AuthService, SupabaseSessionSource


class TestAuthInterface:
    def test_interface_methods_exist(self):
        """IAuthService should define required methods."""
        for method in ["validate_token", "session_from_token"]:
            assert hasattr(IAuthService, method)

    def test_auth_service_has_interface_methods(self):
        """AuthService should have all IAuthService methods."""
        for method in ["validate_token", "session_from_token"]:
            assert callable(getattr(AuthService, method))


class TestSessionSourceInterface:
    def test_supabase_source_satisfies_protocol(self):
        """SupabaseSessionSource should pass the runtime protocol check."""
        assert isinstance(SupabaseSessionSource(MagicMock()), ISessionSource)

    def test_interface_methods_exist(self):
        for method in ["get_session", "on_change", "exchange_code", "update_password"]:
            assert hasattr(ISessionSource, method)
