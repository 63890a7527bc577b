"""
Application Constants

Centralizes magic numbers for voice capture and sheet layout.
Avoids hardcoded values scattered throughout the codebase.

Usage:
    from config.constants import MIN_FINAL_CONFIDENCE, SHEET_DATA_START_ROW
"""

# =============================================================================
# Recognition Thresholds
# =============================================================================

# Final results below this confidence are dropped silently
MIN_FINAL_CONFIDENCE = 0.75


# =============================================================================
# Recognition Timing (seconds)
# =============================================================================

# A final result blocks further finals for this long
PROCESSING_LOCK_SECONDS = 0.5

# Interim transcript updates on mobile are throttled to one per window
MOBILE_INTERIM_THROTTLE_SECONDS = 0.3

# Delay before restarting the recognizer after a platform auto-stop
MOBILE_RESTART_DELAY_SECONDS = 0.2
DESKTOP_RESTART_DELAY_SECONDS = 0.05

# Live transcript is cleared this long after a final is applied
LIVE_TRANSCRIPT_CLEAR_SECONDS = 0.8


# =============================================================================
# Duplicate Suppression
# =============================================================================

# Number of recently accepted utterances remembered per session
RECENT_UTTERANCE_WINDOW = 5


# =============================================================================
# Student Sheet Layout
# =============================================================================

# Zero-based row index of the first data row (rows 1-3 hold the header)
SHEET_DATA_START_ROW = 3

# Rows at or beyond this index are never written
SHEET_MAX_ROWS = 1000

# Range loaded when scanning a student sheet
SHEET_SCAN_RANGE = "A1:K1000"

# Number of recent records returned for the student preview
RECENT_RECORDS_LIMIT = 3
