"""Server connection profile model."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ServerProfile:
    """One stored server connection record."""
    id: int = 0
    host: str = ""
    port: int = 0
    username: str = ""
    password: str = field(default="", repr=False)

    @classmethod
    def from_row(cls, row) -> ServerProfile:
        """Build from a row in (_id, host, port, username, password) order."""
        return cls(
            id=row[0],
            host=row[1],
            port=row[2],
            username=row[3],
            password=row[4],
        )
