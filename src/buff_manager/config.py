# Training slots
MAX_TRAINING_VALUE = 2  # Per-stat training ceiling
MAX_TRAINED_STATS = 5  # Stats that may hold training at once

# Buff ranges (inclusive)
LEVEL_RANGE = (0, 4)
TEAM_COLOR_RANGE = (0, 9)
TEAM_COLOR_PER_STAT_RANGE = (0, 9)
UPGRADE_LEVEL_RANGE = (1, 13)

DEFAULT_UPGRADE_LEVEL = 1
