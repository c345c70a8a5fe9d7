# weight_trend_service/config.py

# --- Trend Predictor Policy ---
# These values were tuned empirically against real user logs, not derived
# from a physiological model. Change them together with the tests.

# Fewer samples than this and the regression is under-determined.
MIN_SAMPLES_FOR_TREND = 3

# Only the most recent window of measurements drives the trend, unless it
# holds fewer than MIN_SAMPLES_FOR_TREND samples.
LOOKBACK_WINDOW_DAYS = 60

# Fits spanning fewer days than this have their slope scaled by span / 14.
SHORT_SPAN_DAMPING_DAYS = 14
# Lower bound of the damping factor for very short spans.
MIN_DAMPING_FACTOR = 0.2

# Physiologically plausible rate of change, in kg per week (either direction).
MAX_WEEKLY_CHANGE_KG = 2.0

# If the fitted line misses the latest measurement by more than this,
# the line is re-anchored through that measurement.
ANCHOR_DEVIATION_KG = 2.0

# How far ahead the headline projection looks.
PROJECTION_HORIZON_DAYS = 30

# The projection never drops below this.
MIN_PREDICTED_WEIGHT_KG = 10.0

# Weekly changes within +/- this band are reported as STABLE.
STABLE_BAND_KG_PER_WEEK = 0.1

# Goal projections further out than this (about two years) are discarded.
MAX_DAYS_TO_GOAL = 730

# --- Presentation ---
PROJECTED_DATE_FORMAT = "%b %d, %Y"

# --- Firestore ---
USERS_COLLECTION = "users"
WEIGHT_LOGS_COLLECTION = "weightLogs"
USERS_PAGE_SIZE = 1000
