"""Yieldpy package"""

import logging

# Setup barebones logging without a handler for users to adapt to their needs.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# One whole unit of an 18 decimal token, in wei
WAD = 10**18

# Internal decimal scale that every buy_fy_token input is normalized to
INTERNAL_DECIMALS = 18

# Significant digits kept by the high-precision decimal context used for the curve math
DECIMAL_PRECISION = 64

# Constants for time conversion
SECONDS_IN_DAY = 24 * 60 * 60
SECONDS_IN_YEAR = 365 * SECONDS_IN_DAY  # 31_536_000
SECONDS_IN_TEN_YEARS = 315_576_000  # 10 * 365.25 days

# Amount, in wei, subtracted from every payout and added to every collection.
# Compensates for the downward bias of the real-valued power function.
PRECISION_FEE = 1_000_000_000_000
