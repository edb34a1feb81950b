from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Optional

import mysql.connector
from mysql.connector import pooling

from ..core.logging_config import get_logger

logger = get_logger("database.connection")


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    charset: str = "utf8mb4"
    pool_size: int = 5

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "employee_db")),
            charset=str(db_config.get("charset", "utf8mb4")),
            pool_size=int(db_config.get("pool_size", 5)),
        )

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"

    def connect_kwargs(self, *, with_database: bool = True) -> dict:
        kwargs = dict(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
            charset=self.charset,
        )
        if with_database:
            kwargs["database"] = self.database
        return kwargs


class DatabaseConnection:
    """Connection factory, one per distinct DBConfig.

    Connections against the configured database come from a lazily created
    pool when pool_size > 0; closing them hands them back to the pool.
    Server-level connections (with_database=False, used to create the
    schema) are always opened directly.
    """

    _instances: Dict[DBConfig, "DatabaseConnection"] = {}
    _instances_lock = threading.Lock()

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._pool_lock = threading.Lock()

    @property
    def config(self) -> DBConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        with cls._instances_lock:
            if config not in cls._instances:
                cls._instances[config] = DatabaseConnection(config)
            return cls._instances[config]

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._pool_lock:
            if self._pool is None:
                logger.info("opening pool of %d for %s", self._config.pool_size, self._config.describe())
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=f"employee_db_{id(self)}",
                    pool_size=self._config.pool_size,
                    **self._config.connect_kwargs(),
                )
            return self._pool

    def connect(self, *, with_database: bool = True):
        if with_database and self._config.pool_size > 0:
            return self._get_pool().get_connection()
        return mysql.connector.connect(**self._config.connect_kwargs(with_database=with_database))
