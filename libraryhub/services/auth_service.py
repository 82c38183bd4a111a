from flask import current_app

from libraryhub.extensions import get_data_client, session_store
from libraryhub.remote.errors import AuthError
from libraryhub.session_store import SIGNED_IN, SIGNED_OUT, Session

class AuthService:
    @staticmethod
    def login(email: str, password: str) -> Session:
        try:
            payload = get_data_client().auth.sign_in_with_password(email, password)
            session = Session.from_auth_response(payload)
        except (AuthError, ValueError) as e:
            current_app.logger.info(f"[AuthService] login failed for {email}: {e}")
            raise ValueError("Invalid email or password.") from e

        session_store.set(session, SIGNED_IN)
        return session

    @staticmethod
    def register(email: str, password: str, full_name: str = ""):
        """Returns the new session, or None when the platform wants the email confirmed first."""
        try:
            payload = get_data_client().auth.sign_up(email, password, full_name=full_name)
        except AuthError as e:
            current_app.logger.info(f"[AuthService] signup failed for {email}: {e}")
            raise ValueError("Registration failed. Please try again.") from e

        if not payload.get("access_token"):
            return None

        try:
            session = Session.from_auth_response(payload)
        except ValueError as e:
            current_app.logger.warning(f"[AuthService] signup returned an unusable session: {e}")
            return None

        session_store.set(session, SIGNED_IN)
        return session

    @staticmethod
    def logout():
        session = session_store.current()
        if session is not None:
            try:
                get_data_client().auth.sign_out(session.access_token)
            except AuthError as e:
                # the local session goes away regardless
                current_app.logger.warning(f"[AuthService] remote sign-out failed: {e}")
        session_store.clear(SIGNED_OUT)
