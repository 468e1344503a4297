# app/config.py
import os

DATA_DIR = os.environ.get("TRACETYPE_DATA_DIR", "data")
DB_PATH = os.environ.get("TRACETYPE_DB_PATH", os.path.join(DATA_DIR, "tracetype.db"))
LOG_FILE = os.environ.get("TRACETYPE_LOG_FILE", "app.log")

# periodic progress save while a session is open
CHECKPOINT_INTERVAL_MS = int(os.environ.get("TRACETYPE_CHECKPOINT_MS", "5000"))

# undo depth; older snapshots fall off the bottom
HISTORY_CAP = 100

MODES = ("trace", "copy")
DEFAULT_MODE = "trace"
