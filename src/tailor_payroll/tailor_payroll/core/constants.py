"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# (min, max, rate); max=None means unbounded.
DEFAULT_TAX_BRACKETS = (
    (0.0, 375_000.0, 0.0),
    (375_000.0, 750_000.0, 0.09),
    (750_000.0, 1_500_000.0, 0.15),
    (1_500_000.0, None, 0.18),
)
DEFAULT_SOCIAL_SECURITY_RATE = 0.05
DEFAULT_SOCIAL_SECURITY_CAP = 50_000.0

DEFAULT_CURRENCY = "AED"

TIME_BONUS_CAP = 0.5
TIME_PENALTY_CAP = 0.3
QUALITY_FULL_THRESHOLD = 90
QUALITY_HALF_THRESHOLD = 70
TIERED_PLACEHOLDER_RATE = 0.10

DEFAULT_COMPLEXITY_FACTOR = 1.0
DEFAULT_DELIVERY_DAYS = 30
DEFAULT_QUALITY_SCORE = 85
