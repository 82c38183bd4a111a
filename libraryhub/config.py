import os

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "super-secret-key")

    # Hosted data platform (REST tables + auth)
    DATA_SERVICE_URL = os.getenv("DATA_SERVICE_URL", "http://localhost:54321")
    DATA_SERVICE_KEY = os.getenv("DATA_SERVICE_KEY", "")
    DATA_SERVICE_TIMEOUT = float(os.getenv("DATA_SERVICE_TIMEOUT", "10"))

    LOAN_PERIOD_DAYS = int(os.getenv("LOAN_PERIOD_DAYS", "14"))
    FEATURED_BOOKS_LIMIT = int(os.getenv("FEATURED_BOOKS_LIMIT", "4"))

    # seconds before expires_at at which a session counts as expired
    SESSION_REFRESH_LEEWAY = int(os.getenv("SESSION_REFRESH_LEEWAY", "10"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "libraryhub_session")
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.getenv("SESSION_COOKIE_SAMESITE", "Lax")
    SESSION_COOKIE_SECURE = os.getenv("SESSION_COOKIE_SECURE", "0") == "1"


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key"
    DATA_SERVICE_URL = "http://data.test"
    DATA_SERVICE_KEY = "anon-test-key"
