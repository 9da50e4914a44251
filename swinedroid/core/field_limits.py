"""Write-side field rules for server profiles.

Strings are cut to ``MAX_FIELD_LENGTH`` characters and out-of-range ports
are replaced with ``MAX_PORT``. Nothing here is applied on read.
"""

from swinedroid.constants import MAX_FIELD_LENGTH, MAX_PORT, MIN_PORT


def truncate_field(value: str) -> str:
    """Cut a text field to at most ``MAX_FIELD_LENGTH`` characters."""
    return value[:MAX_FIELD_LENGTH]


def clamp_port(port: int) -> int:
    """Return *port* if it is a valid TCP port, otherwise ``MAX_PORT``."""
    if port < MIN_PORT or port > MAX_PORT:
        return MAX_PORT
    return port


def sanitize_server_fields(
    host: str, port: int, username: str, password: str,
) -> tuple[str, int, str, str]:
    """Apply the write rules to a full set of profile fields."""
    return (
        truncate_field(host),
        clamp_port(port),
        truncate_field(username),
        truncate_field(password),
    )
