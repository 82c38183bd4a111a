from dataclasses import dataclass
from typing import Optional

from flask import current_app, g, has_app_context

from libraryhub.remote.errors import DataServiceError
from libraryhub.repositories.cart_repo import CartRepo


@dataclass
class NavState:
    authenticated: bool = False
    cart_count: int = 0
    email: Optional[str] = None


class NavigationShell:
    """Session-aware header: menu variant plus cart badge.

    Subscribed to the session store for as long as the app lives; a session
    change drops the per-request cached state so the header is derived again
    from the new session.
    """

    def __init__(self):
        self._store = None
        self._unsubscribe = None

    def init_app(self, app, store):
        self.close()
        self._store = store
        self._unsubscribe = store.subscribe(self.on_session_change)
        app.context_processor(self._inject)
        app.extensions["navigation"] = self

    def close(self):
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def on_session_change(self, event, session):
        if not has_app_context():
            return
        g.pop("nav_state", None)
        current_app.logger.debug(f"[Navigation] {event}: header state reset")

    def current_state(self) -> NavState:
        if "nav_state" in g:
            return g.nav_state

        session = self._store.current()
        if session is None:
            state = NavState(authenticated=False)
        else:
            state = NavState(authenticated=True, cart_count=self._cart_count(session.user_id), email=session.email)

        g.nav_state = state
        return state

    @staticmethod
    def _cart_count(user_id: str) -> int:
        try:
            return CartRepo.count_by_user(user_id)
        except DataServiceError as e:
            current_app.logger.warning(f"[Navigation] cart count fetch failed: {e}")
            return 0

    def _inject(self):
        return {"nav": self.current_state()}


navigation = NavigationShell()
