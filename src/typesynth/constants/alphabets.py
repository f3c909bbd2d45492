"""Character sets used by the pre-seeded text strategies.

Random strings and characters are drawn from these alphabets. They are
plain module constants so callers registering their own text strategies
can reuse them.
"""

# =============================================================================
# Letters and Digits
# =============================================================================

ENGLISH_ALPHABET = "abcdefghijklmnopqrstuvwxyz"
NUMBERS = "0123456789"

ALPHANUMERICS = ENGLISH_ALPHABET + NUMBERS
ALPHANUMERICS_WITH_UPPER = ENGLISH_ALPHABET + ENGLISH_ALPHABET.upper() + NUMBERS

# =============================================================================
# String Strategy Alphabet
# =============================================================================
# Generated strings may contain spaces so they look a little more like text.

STRING_ALPHABET = ALPHANUMERICS_WITH_UPPER + " "
