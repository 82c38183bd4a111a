from flask import current_app

from libraryhub.remote import DataClient
from libraryhub.session_store import SessionStore

data_client = DataClient()
session_store = SessionStore()


def get_data_client() -> DataClient:
    return current_app.extensions["data_client"]
