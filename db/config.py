"""Database configuration loaded from the environment."""

import os
import re
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# A plain unquoted schema name
SCHEMA_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DatabaseConfig(BaseModel):
    """Connection settings for the hotel listing database."""

    host: str = "localhost"
    port: int = 5432
    database: str = "hotels"
    user: Optional[str] = None
    password: Optional[str] = None

    # Schema holding the wp_* tables, applied as search_path on each connection
    search_path: str = "public"

    min_size: int = Field(default=1, ge=1)
    max_size: int = Field(default=10, ge=1)
    command_timeout: float = 60

    @field_validator("search_path")
    @classmethod
    def validate_search_path(cls, v: str) -> str:
        """Only plain schema names, it ends up in a SET statement."""
        schemas = [s.strip() for s in v.split(",")]
        if not all(SCHEMA_NAME.match(s) for s in schemas):
            raise ValueError(f"Invalid search_path: {v!r}")
        return ", ".join(schemas)

    @property
    def quoted_search_path(self) -> str:
        return ", ".join(f'"{s}"' for s in self.search_path.split(", "))

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        """Build config from DATABASE_URL, falling back to HOTELS_DB_* vars."""
        load_dotenv()

        search_path = os.getenv("HOTELS_DB_SCHEMA", "public")
        url = os.getenv("DATABASE_URL")
        if url:
            parsed = urlparse(url)
            return cls(
                host=parsed.hostname or "localhost",
                port=parsed.port or 5432,
                database=parsed.path.lstrip("/") or "hotels",
                user=parsed.username,
                password=parsed.password,
                search_path=search_path,
            )

        return cls(
            host=os.getenv("HOTELS_DB_HOST", "localhost"),
            port=int(os.getenv("HOTELS_DB_PORT", "5432")),
            database=os.getenv("HOTELS_DB_NAME", "hotels"),
            user=os.getenv("HOTELS_DB_USER"),
            password=os.getenv("HOTELS_DB_PASSWORD"),
            search_path=search_path,
        )
