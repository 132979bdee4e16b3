import os
from datetime import timedelta
from decimal import Decimal
from urllib.parse import quote_plus

BASEDIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _database_uri():
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    if os.getenv("DB_HOST"):
        db_user = os.getenv("DB_USER")
        db_password = quote_plus(os.getenv("DB_PASSWORD", ""))
        db_host = os.getenv("DB_HOST")
        db_port = os.getenv("DB_PORT", "5432")
        db_name = os.getenv("DB_NAME")
        return (
            f"postgresql+psycopg2://{db_user}:{db_password}"
            f"@{db_host}:{db_port}/{db_name}"
        )

    return "sqlite:///" + os.path.join(BASEDIR, "marketplace.db")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "secret")

    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.getenv("JWT_SECRET", "jwt-secret")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)
    JWT_TOKEN_LOCATION = ["headers", "cookies"]
    JWT_ACCESS_COOKIE_NAME = "token"
    JWT_ACCESS_COOKIE_PATH = "/"
    JWT_COOKIE_SECURE = os.getenv("COOKIE_SECURE", "False") == "True"
    JWT_COOKIE_CSRF_PROTECT = False

    BCRYPT_LOG_ROUNDS = int(os.getenv("BCRYPT_LOG_ROUNDS", 12))

    # Email verification
    VERIFICATION_CODE_TTL_MINUTES = int(os.getenv("VERIFICATION_CODE_TTL_MINUTES", 15))
    MAIL_FROM = os.getenv("MAIL_FROM", "ModestMuse <noreply@modestmuse.com>")
    MAIL_ENABLED = os.getenv("MAIL_ENABLED", "True") == "True"

    # Share of delivered sales kept by the platform
    ADMIN_COMMISSION_RATE = Decimal(os.getenv("ADMIN_COMMISSION_RATE", "0.20"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SECRET_KEY = "test-secret-key"
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length"
    BCRYPT_LOG_ROUNDS = 4
    LOG_LEVEL = "WARNING"
