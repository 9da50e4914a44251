"""Application-wide constants for the server profile store."""

# Database
DB_FILENAME = "data"
DATABASE_VERSION = 3
DATABASE_TABLE = "servers"

# Column keys
KEY_ROWID = "_id"
KEY_HOST = "host"
KEY_PORT = "port"
KEY_USERNAME = "username"
KEY_PASSWORD = "password"

SERVER_COLUMNS = (KEY_ROWID, KEY_HOST, KEY_PORT, KEY_USERNAME, KEY_PASSWORD)

# Field limits applied on write
MAX_FIELD_LENGTH = 127  # columns are varchar(128)
MIN_PORT = 1
MAX_PORT = 65535

# Returned by create() when the insert fails
INVALID_ROW_ID = -1

# SQLite INTEGER range; ids outside it cannot match any row
MIN_ROW_ID = -(2 ** 63)
MAX_ROW_ID = 2 ** 63 - 1
