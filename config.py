import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./chat_auth.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 5001)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["http://localhost:5173"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))

    # Session cookie
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_EXPIRE_DAYS = data.get("JWT_EXPIRE_DAYS", 7)
    SESSION_COOKIE_SECURE = bool(data.get("SESSION_COOKIE_SECURE", False))

    # Password reset mail
    FRONTEND_URL = data.get("FRONTEND_URL")
    SMTP_HOST = data.get("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT = data.get("SMTP_PORT", 587)
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    MAIL_USERNAME = data.get("MAIL_USERNAME")
    MAIL_PASSWORD = data.get("MAIL_PASSWORD")
    MAIL_FROM = data.get("MAIL_FROM")
    EMAIL_SEND_TIMEOUT_SECONDS = data.get("EMAIL_SEND_TIMEOUT_SECONDS", 10)
    RESET_TOKEN_TTL_MINUTES = data.get("RESET_TOKEN_TTL_MINUTES", 10)
    RESET_CONCEAL_UNKNOWN_EMAIL = bool(data.get("RESET_CONCEAL_UNKNOWN_EMAIL", False))
    REQUIRE_MAIL_CONFIG = bool(data.get("REQUIRE_MAIL_CONFIG", False))
