from __future__ import annotations

from dataclasses import dataclass

import mysql.connector


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "hr_db")),
        )


class DatabaseConnection:
    """DB connection factory, one per container.

    Note: We create short-lived connections per operation (safe for simple Flask apps).
    """

    def __init__(self, config: DBConfig):
        self._config = config

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=int(self._config.port),
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
        )
