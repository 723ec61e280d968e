"""
SQLite Storage Configuration

Built-in constants for the container storage layer. Values that users may
override (timeouts, WAL) are read through featurestyle.config.
"""

# Connection settings
DEFAULT_TIMEOUT = 30.0
ENABLE_WAL_MODE = True
DEFAULT_FILE_NAME = "container.gpkg"

# Contents data types
DATA_TYPE_FEATURES = "features"
DATA_TYPE_TILES = "tiles"
DATA_TYPE_ATTRIBUTES = "attributes"

# Schema version
SCHEMA_VERSION = "1.0"
