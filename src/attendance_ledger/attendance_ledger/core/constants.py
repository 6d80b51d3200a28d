"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EXACT_MATCH_SCORE = 100
PARTIAL_MATCH_SCORE = 85
NO_MATCH_SCORE = 0

# Matched names scoring at or above this are PRESENT, below it NEEDS_REVIEW.
DEFAULT_PRESENT_THRESHOLD = 90

ALLOWED_FINE_AMOUNTS = (20, 50)
DEFAULT_FINE_AMOUNT = 20

DELETION_LOCK_DAYS = 60

DEFAULT_TIMEZONE = "Asia/Kolkata"
DEFAULT_REPORT_SIGNATURE = "ADY ADMIN"
CURRENCY_SYMBOL = "₹"

UNASSIGNED_LEADER_LABEL = "Unassigned"
