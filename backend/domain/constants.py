"""
Domain constants used across services/routers.
"""

import string

# Order identifiers: "ST-" + 12 symbols from [0-9A-Za-z]
ORDER_ID_PREFIX = "ST-"
ORDER_ID_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
ORDER_ID_LENGTH = 12

# Vendor listing pagination
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
# Largest row offset SQLite accepts (signed 64-bit INTEGER)
MAX_ROW_OFFSET = 2**63 - 1

# Working hours: one entry per day, seeded when a vendor is created
WEEK_DAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
DEFAULT_OPENING_TIME = "08:00"
DEFAULT_CLOSING_TIME = "20:00"
