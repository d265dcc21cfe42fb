import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    APP_URL = data.get("APP_URL", "http://localhost:8000")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    SECRET_KEY = data.get("SECRET_KEY", "dev-secret-key-change-in-production")
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))

    # Sessions
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "session_id")
    SESSION_COOKIE_SECURE = bool(data.get("SESSION_COOKIE_SECURE", False))
    SESSION_TTL_MINUTES = int(data.get("SESSION_TTL_MINUTES", 1440))

    # Email verification and password reset
    PASSWORD_RESET_TOKEN_TTL_MINUTES = int(data.get("PASSWORD_RESET_TOKEN_TTL_MINUTES", 60))
    VERIFICATION_LINK_TTL_MINUTES = int(data.get("VERIFICATION_LINK_TTL_MINUTES", 60))
    FRONTEND_RESET_URL = data.get("FRONTEND_RESET_URL", "http://localhost:3000/reset-password")
    REDIRECT_ALLOWED_ORIGINS = data.get("REDIRECT_ALLOWED_ORIGINS", ["http://localhost:3000"])

    # Mail
    MAIL_BACKEND = data.get("MAIL_BACKEND", "log")  # "log" or "smtp"
    MAIL_SERVER = data.get("MAIL_SERVER", "localhost")
    MAIL_PORT = int(data.get("MAIL_PORT", 587))
    MAIL_USERNAME = data.get("MAIL_USERNAME", "")
    MAIL_PASSWORD = data.get("MAIL_PASSWORD", "")
    MAIL_FROM = data.get("MAIL_FROM", "no-reply@example.com")
    MAIL_FROM_NAME = data.get("MAIL_FROM_NAME", "Accounts")
    MAIL_STARTTLS = bool(data.get("MAIL_STARTTLS", True))
    MAIL_SSL_TLS = bool(data.get("MAIL_SSL_TLS", False))
