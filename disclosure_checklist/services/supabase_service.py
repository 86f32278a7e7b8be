from supabase import create_client
from supabase.client import ClientOptions
from flask import current_app


def init_supabase(app):
    """Server-side client for table access. Never used for user sign-in."""
    url = app.config.get('SUPABASE_URL')
    # Service role key bypasses row-level security for server-side form writes
    key = app.config.get('SUPABASE_SERVICE_ROLE_KEY') or app.config.get('SUPABASE_KEY')

    if not url or not key:
        return None

    return create_client(url, key)


def init_supabase_auth(app):
    """
    Returns a factory of short-lived auth clients, or None when Supabase is not configured.
    A signed-in client rewrites its own Authorization header with the user's token,
    so each auth call gets a fresh client and the table client keeps its key.
    """
    url = app.config.get('SUPABASE_URL')
    key = app.config.get('SUPABASE_KEY') or app.config.get('SUPABASE_SERVICE_ROLE_KEY')

    if not url or not key:
        return None

    def make_client():
        return create_client(url, key, options=ClientOptions(auto_refresh_token=False, persist_session=False))
    return make_client


class SupabaseAuth:
    """
    Thin wrapper over Supabase auth returning the remote user (or None).
    Every call is a remote call; errors propagate to the route, which logs them.
    """

    @staticmethod
    def available():
        return getattr(current_app, 'supabase_auth', None) is not None

    @staticmethod
    def _auth():
        return current_app.supabase_auth().auth

    @staticmethod
    def sign_in(email, password):
        res = SupabaseAuth._auth().sign_in_with_password({"email": email, "password": password})
        return res.user

    @staticmethod
    def sign_up(email, password):
        res = SupabaseAuth._auth().sign_up({"email": email, "password": password})
        return res.user

    @staticmethod
    def send_recovery_email(email, redirect_to=None):
        options = {"redirect_to": redirect_to} if redirect_to else {}
        SupabaseAuth._auth().reset_password_email(email, options)

    @staticmethod
    def update_password(access_token, new_password):
        """Recovery links carry an access token; it identifies the user whose password changes."""
        user = SupabaseAuth._auth().get_user(access_token).user
        if not user:
            return None
        # Admin API needs the service role client
        current_app.supabase.auth.admin.update_user_by_id(user.id, {"password": new_password})
        return user
