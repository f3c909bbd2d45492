"""Value generation defaults.

These are the defaults behind CONFIG_SCHEMA in typesynth.config. Ranges are
half-open: the lower bound is included and the upper bound is excluded.
"""

# =============================================================================
# Collection Cardinality
# =============================================================================
# When no explicit count is given, collections get a random number of
# elements in [COLLECTION_MIN, COLLECTION_MAX).

COLLECTION_MIN = 5
COLLECTION_MAX = 50

# =============================================================================
# Numeric Ranges
# =============================================================================
# Integers are drawn from [INT_MIN, INT_MAX). Floats and decimals are derived
# from the same draw by dividing with the divisors below, so they are not
# whole numbers.

INT_MIN = -10_000
INT_MAX = 10_000
FLOAT_DIVISOR = 7.1261
DECIMAL_DIVISOR = "-51.221"

# =============================================================================
# Text
# =============================================================================
# Random strings have a length in [STRING_MIN_LENGTH, STRING_MAX_LENGTH).

STRING_MIN_LENGTH = 5
STRING_MAX_LENGTH = 20

# =============================================================================
# Dates and Times
# =============================================================================
# Datetimes are "now" shifted by a uniform number of seconds in
# [-SECONDS_SPREAD, SECONDS_SPREAD). The default is the signed 32-bit range,
# roughly 68 years each way.

SECONDS_SPREAD = 2**31

# =============================================================================
# Traversal
# =============================================================================
# Depth of the root value during a graph walk. Depth grows by one for each
# level of nested members.

TOP_LEVEL = 1

# =============================================================================
# Member Metadata
# =============================================================================
# Key looked up in dataclass field metadata and pydantic json_schema_extra to
# exclude a member from generation.

NOT_GENERATED_KEY = "not_generated"
