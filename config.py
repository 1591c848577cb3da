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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    REDIS_URL = data.get("REDIS_URL", "redis://localhost:6379/0")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", False))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    LOG_FORMAT = data.get("LOG_FORMAT", "console")  # "console" or "json"

    # Balance engine
    CACHE_BACKEND = data.get("CACHE_BACKEND", "memory")  # "memory" or "redis"
    BALANCE_CACHE_TTL_SECONDS = data.get("BALANCE_CACHE_TTL_SECONDS", 300)
    REDIS_SOCKET_TIMEOUT_SECONDS = data.get("REDIS_SOCKET_TIMEOUT_SECONDS", 2.0)
    LEDGER_QUERY_TIMEOUT_SECONDS = data.get("LEDGER_QUERY_TIMEOUT_SECONDS", 10.0)
    CREDIT_HEADROOM_THRESHOLD = data.get("CREDIT_HEADROOM_THRESHOLD", 0.8)  # Fraction of limit => "limited"
