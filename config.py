import os
import sys
from dotenv import load_dotenv
from passlib.context import CryptContext
from fastapi.security import OAuth2PasswordBearer
from typing import Any, Dict, List, Tuple, Type

load_dotenv()

class ConfigError(Exception):
    """A setting is missing or cannot be converted to its type"""
    pass

class Settings:
    """
    Application settings read from the environment (and a local .env file)

    Every entry is (default, type); a default of None makes the variable required.
    Values are reachable as attributes, e.g. settings.MINIO_BUCKET.
    """

    SCHEMA: Dict[str, Tuple[Any, Type]] = {
        # MongoDB
        "DATABASE_URL": (None, str),
        "DATABASE_NAME": (None, str),
        "DB_MAX_POOL_SIZE": (10, int),
        "DB_MAX_RECONNECT_ATTEMPTS": (5, int),
        "DB_RECONNECT_DELAY": (5, int),  # seconds
        "DB_SERVER_SELECTION_TIMEOUT_MS": (5000, int),
        "DB_CONNECT_TIMEOUT_MS": (5000, int),
        # Tokens
        "JWT_SECRET_KEY": (None, str),
        "JWT_ALGORITHM": ("HS256", str),
        "JWT_ACCESS_TOKEN_EXPIRE_MINUTES": (60 * 24, int),
        # Object storage for avatars, CVs and portfolio files
        "MINIO_USERNAME": (None, str),
        "MINIO_PASSWORD": (None, str),
        "MINIO_SERVER": (None, str),
        "MINIO_BUCKET": (None, str),
        "MAX_UPLOAD_SIZE_MB": (10, int),
        # Comma separated origins allowed to call the API
        "CORS_ORIGINS": ("*", list),
        "LOG_LEVEL": ("INFO", str),
    }

    def __init__(self):
        self.values: Dict[str, Any] = {}
        self._load()

    def _load(self):
        missing = [key for key, (default, _) in self.SCHEMA.items() if default is None and not os.getenv(key)]
        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

        for key, (default, type_) in self.SCHEMA.items():
            raw = os.getenv(key)
            if raw is None:
                raw = default
                if not isinstance(raw, str):
                    self.values[key] = raw
                    continue
            try:
                self.values[key] = self._convert(raw, type_)
            except ValueError as e:
                raise ConfigError(f"Invalid value for {key}: {e}")

    @staticmethod
    def _convert(raw: str, type_: Type) -> Any:
        if type_ == bool:
            return raw.lower() in ('true', '1', 'yes')
        if type_ == list:
            return Settings._split_list(raw)
        return type_(raw)

    @staticmethod
    def _split_list(value: str) -> List[str]:
        return [item.strip() for item in value.split(",") if item.strip()]

    def __getattr__(self, name):
        if name in self.values:
            return self.values[name]
        raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")

try:
    settings = Settings()
except ConfigError as e:
    print(f"Configuration Error: {e}")
    sys.exit(1)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")

DATABASE_URL = settings.DATABASE_URL
DATABASE_NAME = settings.DATABASE_NAME
DB_MAX_POOL_SIZE = settings.DB_MAX_POOL_SIZE
DB_MAX_RECONNECT_ATTEMPTS = settings.DB_MAX_RECONNECT_ATTEMPTS
DB_RECONNECT_DELAY = settings.DB_RECONNECT_DELAY
DB_SERVER_SELECTION_TIMEOUT_MS = settings.DB_SERVER_SELECTION_TIMEOUT_MS
DB_CONNECT_TIMEOUT_MS = settings.DB_CONNECT_TIMEOUT_MS

JWT_SECRET_KEY = settings.JWT_SECRET_KEY
JWT_ALGORITHM = settings.JWT_ALGORITHM
JWT_ACCESS_TOKEN_EXPIRE_MINUTES = settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES

MINIO_USERNAME = settings.MINIO_USERNAME
MINIO_PASSWORD = settings.MINIO_PASSWORD
MINIO_SERVER = settings.MINIO_SERVER
MINIO_BUCKET = settings.MINIO_BUCKET
MAX_UPLOAD_SIZE_MB = settings.MAX_UPLOAD_SIZE_MB

CORS_ORIGINS = settings.CORS_ORIGINS
LOG_LEVEL = settings.LOG_LEVEL
