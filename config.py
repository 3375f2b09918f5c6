# config.py
# Global configuration constants for the page replacement simulator

EMPTY_SLOT = -1  # Marks an empty frame slot; never a valid page id

# Form defaults (classic textbook reference string)
DEFAULT_REFERENCE_STRING = "7 0 1 2 0 3 0 4 2 3 0 3 2"
DEFAULT_FRAME_COUNT = 3
DEFAULT_W1 = 1.0  # AFR frequency weight
DEFAULT_W2 = 1.0  # AFR recency weight

# Frame count limits for the UI
MIN_FRAME_COUNT = 1
MAX_FRAME_COUNT = 16

EVENT_LOG_TAIL = 20  # Most recent events shown in the UI
