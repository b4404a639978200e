"""Unified constants for opticaldup.

Defaults shared by the finder, the configuration layer and the CLI.
"""

# ================== Read Name Parsing ==================
# Conventional Illumina read name: <instrument>:<lane>:<tile>:<x>:<y>[...]
# Names matching this exact regex take the colon-split fast path.
DEFAULT_READ_NAME_REGEX: str = "[a-zA-Z0-9]+:[0-9]:([0-9]+):([0-9]+):([0-9]+).*"

# Delimiter between read name fields on the fast path
READ_NAME_DELIMITER: str = ":"

# Field counts accepted on the fast path (legacy 5-field and CASAVA 1.8 7-field names)
ACCEPTED_FIELD_COUNTS: frozenset = frozenset({5, 7})

# Capture groups a custom regex must define, in order: tile, x, y
READ_NAME_REGEX_GROUPS: int = 3


# ================== Clustering ==================
# Maximum pixel offset (inclusive) for two clusters to be optical duplicates
DEFAULT_OPTICAL_DUPLICATE_DISTANCE: int = 100

# Location fields are stored as signed 16-bit values
SHORT_MIN: int = -(1 << 15)
SHORT_MAX: int = (1 << 15) - 1

# Value of an unset read group, tile, coordinate or library id
UNSET: int = -1


# ================== Duplicate Set Tables ==================
SET_ID_COLUMN: str = "set_id"
READ_NAME_COLUMN: str = "read_name"
READ_GROUP_COLUMN: str = "read_group"
LIBRARY_COLUMN: str = "library"
OPTICAL_DUPLICATE_COLUMN: str = "optical_duplicate"
