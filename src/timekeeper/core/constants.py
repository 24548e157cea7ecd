"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

DAY_KEY_FORMAT = "%Y-%m-%d"
DEFAULT_LATE_CUTOFF = time(9, 15)
HOURS_DECIMALS = 2
AVERAGE_HOURS_DECIMALS = 1
HOURS_UNIT_SUFFIX = "h"
DEFAULT_HR_PASSWORD = "hr123"
