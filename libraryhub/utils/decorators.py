from functools import wraps
from flask import redirect, url_for

from libraryhub.extensions import session_store

def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if session_store.current() is None:
            return redirect(url_for("web.auth_page"))
        return view(*args, **kwargs)
    return wrapped

def current_user_id():
    session = session_store.current()
    return session.user_id if session else None
