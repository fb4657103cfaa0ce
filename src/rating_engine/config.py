from pathlib import Path

# Packaged coefficient catalog
COEFFICIENTS_FILE = Path(__file__).parent / "data" / "position_coefficients.json"

# Upgrade level -> flat OVR bonus (applied after the weighted average)
UPGRADE_OVR_BONUS = {
    1: 0,
    2: 1,
    3: 2,
    4: 4,
    5: 6,
    6: 9,
    7: 12,
    8: 15,
    9: 18,
    10: 21,
    11: 23,
    12: 25,
    13: 27,
}

# Position-only rating bounds (rounded_clamped_ovr)
MIN_POSITION_OVR = 0
MAX_POSITION_OVR = 99

# A single stat never trains past this value
MAX_STAT_VALUE = 99

# Training plan search
PLAN_MAX_ITERATIONS = 100
PLAN_DEFAULT_MAX_STAT_INCREASE = 5
PLAN_KEY_STATS = 10  # Top N stats (by coefficient) the planner may raise

DEFAULT_KEY_STATS = 5
