"""
Detection constants.

Default tuning values and the ranges offered to users when they
adjust detection settings. The engine only enforces positivity;
the ranges are guidance for UIs and the CLI.
"""

# === Defaults ===
DEFAULT_MIN_SPEED_THRESHOLD_KMH = 8.0
DEFAULT_MIN_RUN_DURATION_S = 5.0
DEFAULT_MIN_STOP_DURATION_S = 3.0
DEFAULT_SPEED_SMOOTHING_WINDOW = 3

# === Recommended ranges (min, max, step) ===
SPEED_THRESHOLD_RANGE_KMH = (4.0, 15.0, 0.5)
RUN_DURATION_RANGE_S = (2, 20, 1)
STOP_DURATION_RANGE_S = (1, 10, 1)
SMOOTHING_WINDOW_RANGE = (1, 10, 1)

# Namespace for deterministic run identifiers (uuid5)
RUN_ID_NAMESPACE = "6f1c2a7e-3b9d-4c1e-9a52-0d7e4b8f1a36"
