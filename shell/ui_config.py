HINT_PULSE_SEC = 1.5
AUTO_COMPLETE_START_DELAY_SEC = 0.3
AUTO_COMPLETE_STEP_DELAY_SEC = 0.1
STREAK_MILESTONE = 10

AUTO_COMPLETE_ORDER = ("instant", "paced")
LOG_LEVEL_ORDER = ("DEBUG", "INFO", "WARNING", "ERROR")
MAX_HISTORY_LIMIT = 500
