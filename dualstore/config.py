# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Typed settings for the two stores and for upload handling,
#   read from the environment (and a .env file at the project root).
#
# SECTIONS:
# ---------
# - MySQLConfig    MYSQL_HOST / MYSQL_PORT / MYSQL_USER / MYSQL_PASSWORD / MYSQL_DATABASE
# - MongoConfig    MONGO_HOST / MONGO_PORT / MONGO_USER / MONGO_PASSWORD / MONGO_DATABASE
#                  (empty user or password means no authentication)
# - StorageConfig  UPLOAD_DIR, LARGE_JSON_BYTES (JSON payloads above this
#                  size go to the document store)
# - AppConfig      groups the three sections
#
# Every section has a from_env() constructor; the dataclass
# defaults double as the fallbacks for unset variables.
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig    cached after the first call
# - reset_config()               drop the cache (tests, reloads)
#
# USAGE:
# ------
#   config = get_config()
#   relational, document = create_stores(config)
#
# ==============================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


LARGE_JSON_BYTES = 1024 * 1024

ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value else default


@dataclass
class MySQLConfig:
    """Relational store connection."""
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = "root"
    database: str = "dualstore"

    @classmethod
    def from_env(cls) -> "MySQLConfig":
        return cls(
            host=os.getenv("MYSQL_HOST", cls.host),
            port=_env_int("MYSQL_PORT", cls.port),
            user=os.getenv("MYSQL_USER", cls.user),
            password=os.getenv("MYSQL_PASSWORD", cls.password),
            database=os.getenv("MYSQL_DATABASE", cls.database),
        )


@dataclass
class MongoConfig:
    """Document store connection."""
    host: str = "localhost"
    port: int = 27017
    user: Optional[str] = None
    password: Optional[str] = None
    database: str = "dualstore"

    @classmethod
    def from_env(cls) -> "MongoConfig":
        return cls(
            host=os.getenv("MONGO_HOST", cls.host),
            port=_env_int("MONGO_PORT", cls.port),
            user=os.getenv("MONGO_USER") or None,
            password=os.getenv("MONGO_PASSWORD") or None,
            database=os.getenv("MONGO_DATABASE", cls.database),
        )


@dataclass
class StorageConfig:
    """Where uploads live and when JSON counts as large."""
    upload_dir: str = "uploads/"
    large_json_bytes: int = LARGE_JSON_BYTES

    @classmethod
    def from_env(cls) -> "StorageConfig":
        return cls(
            upload_dir=os.getenv("UPLOAD_DIR", cls.upload_dir),
            large_json_bytes=_env_int("LARGE_JSON_BYTES", cls.large_json_bytes),
        )


@dataclass
class AppConfig:
    mysql: MySQLConfig = field(default_factory=MySQLConfig)
    mongo: MongoConfig = field(default_factory=MongoConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


_cached: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Build the application config from the environment.

    The .env file is read on the first call only; later calls return
    the same AppConfig until reset_config() is called.

    Returns:
        AppConfig: Application configuration
    """
    global _cached

    if _cached is None:
        # Variables already in the environment take precedence over .env
        load_dotenv(dotenv_path=ENV_FILE)
        _cached = AppConfig(
            mysql=MySQLConfig.from_env(),
            mongo=MongoConfig.from_env(),
            storage=StorageConfig.from_env(),
        )

    return _cached


def reset_config() -> None:
    """Forget the cached config so the next get_config() re-reads the environment."""
    global _cached
    _cached = None
