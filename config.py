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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 5000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["http://localhost:3000"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Session tokens
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_DAYS = int(data.get("JWT_EXPIRE_DAYS", 30))
    COOKIE_NAME = data.get("COOKIE_NAME", "token")
    COOKIE_SECURE = bool(data.get("COOKIE_SECURE", False))

    # Password reset
    RESET_TOKEN_EXPIRE_MINUTES = int(data.get("RESET_TOKEN_EXPIRE_MINUTES", 10))
    RESET_TOKEN_BYTES = int(data.get("RESET_TOKEN_BYTES", 20))
    CLIENT_URL = data.get("CLIENT_URL", "http://localhost:3000")
    FORGOT_PASSWORD_CONCEAL_UNKNOWN_EMAIL = bool(
        data.get("FORGOT_PASSWORD_CONCEAL_UNKNOWN_EMAIL", False)
    )
    ENABLE_USER_EXISTS_CHECK = bool(data.get("ENABLE_USER_EXISTS_CHECK", True))

    # Mail transport; an empty EMAIL_HOST logs reset links instead of sending
    EMAIL_HOST = data.get("EMAIL_HOST", "")
    EMAIL_PORT = int(data.get("EMAIL_PORT", 587))
    EMAIL_USER = data.get("EMAIL_USER", "")
    EMAIL_PASSWORD = data.get("EMAIL_PASSWORD", "")
    EMAIL_USE_TLS = bool(data.get("EMAIL_USE_TLS", True))
    FROM_NAME = data.get("FROM_NAME", "Auth Service")
    FROM_EMAIL = data.get("FROM_EMAIL", "noreply@localhost")
