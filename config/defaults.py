"""Default configuration constants for the hall seating engine."""

# Classification keys an individual can be grouped by
CLASSIFICATION_KEYS = ["year", "branch", "subject", "batch"]
DEFAULT_CLASSIFICATION_KEY = "year"

# Label used when a record has no value for the classification key
UNKNOWN_LABEL = "Unknown"

# Furniture types
FURNITURE_BENCH = "Bench"
FURNITURE_CHAIR = "Chair"
DEFAULT_FURNITURE = FURNITURE_BENCH

# Seat columns forming one physical unit
UNIT_WIDTH = {
    FURNITURE_BENCH: 3,
    FURNITURE_CHAIR: 2,
}

# Occupants per bench unit, most preferred first
DENSITY_MODES = [2, 3]

# Two-group unit patterns ("A"/"B" are the first two groups of the rotation order)
BENCH_PATTERN = ("A", "B", "A")
BENCH_PATTERN_SPARSE = ("A", None, "B")  # 2-per-bench: middle seat unused
CHAIR_PATTERN = ("A", "B")
EXHAUSTION_PATTERN = ("X", None, "X")    # X = whichever group still has members

# Column-generation strategies
STRATEGIES = ["alternating", "rotating", "top_n"]
DEFAULT_STRATEGY = "rotating"

# Post-fill passes enabled per strategy
STRATEGY_PASSES = {
    "alternating": {"rebalance": False, "repair": False},
    "rotating": {"rebalance": False, "repair": True},
    "top_n": {"rebalance": True, "repair": False},
}

# top_n: groups selected per hall = max(TOP_N_MIN_GROUPS, ceil(groups / 2))
TOP_N_MIN_GROUPS = 2

# Adjacency repair sweep budget
MAX_REPAIR_SWEEPS = 50

# Label compared against left/right neighbours when rebalancing
DEFAULT_ADJACENCY_KEY = "batch"

# Characters of the identifier used as batch when none is given
BATCH_PREFIX_LENGTH = 4

# Summary keys for the per-hall range report
RANGE_SUMMARY_KEYS = ("year", "batch")
