"""
Default tuning constants for puzzle generation and solving.
"""

# Generation parameters
MAX_GENERATION_ATTEMPTS = 20
SHUFFLE_MULTIPLIER = 1.5
SHUFFLE_PADDING = 5
GENERATION_WORKERS = 1

# Solver parameters
SOLVER_TIME_LIMIT = 30.0  # seconds
SOLVER_MAX_EXPANSIONS = 200000

# Scoring parameters
POINTS_PER_MOVE_SAVED = 100
PAR_BONUS = 50

# Logging configuration
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
