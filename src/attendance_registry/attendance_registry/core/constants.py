"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ZERO_IDENTITY = "0x0000000000000000000000000000000000000000"
DEFAULT_CALLER_HEADER = "X-Caller-Identity"
DEFAULT_NOTIFICATION_LIMIT = 200
REGISTRY_META_ROW_ID = 1
