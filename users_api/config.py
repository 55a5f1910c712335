"""Server configuration."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Config:
    host: str = "127.0.0.1"
    port: int = 3333
    debug: bool = False

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 65535:
            raise ValueError(f"Invalid port: {self.port}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Read ``USERS_API_HOST``, ``USERS_API_PORT`` and ``USERS_API_DEBUG``."""
        environ = os.environ if environ is None else environ

        port = environ.get("USERS_API_PORT", str(cls.port))
        try:
            port_number = int(port)
        except ValueError:
            raise ValueError(f"Invalid port: {port!r}") from None

        return cls(
            host=environ.get("USERS_API_HOST", cls.host),
            port=port_number,
            debug=environ.get("USERS_API_DEBUG", "").lower() in TRUE_VALUES,
        )
