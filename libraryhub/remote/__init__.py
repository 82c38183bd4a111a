from libraryhub.remote.errors import AuthError, DataServiceError
from libraryhub.remote.rest import DataClient, QueryResult, TableQuery

__all__ = [
    "AuthError",
    "DataClient",
    "DataServiceError",
    "QueryResult",
    "TableQuery",
]
