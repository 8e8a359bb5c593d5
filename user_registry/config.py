"""
Design (config.py)
- Purpose: Centralize constants and configuration.
- Inputs: None.
- Outputs: Constants (file names, JSON tags, intervals, log format).
- Side effects: None.
- Thread-safety: N/A (read-only constants).
"""

# Persistence: default location is <user data dir>/DATA_DIR_NAME/DATA_FILENAME
DATA_DIR_NAME = "users_registry"
DATA_FILENAME = "users.txt"

# Overrides the default data file path when set (the --data flag still wins)
DATA_PATH_ENV = "USER_REGISTRY_DATA"

# Short tags used in the persisted JSON document
NEXT_ID_TAG = "i"
USERS_TAG = "u"
FIRST_NAME_TAG = "n"
LAST_NAME_TAG = "s"
EMAIL_TAG = "e"
PHONE_NUMBER_TAG = "p"

# Phone numbers are accepted on the CLI as unsigned 64-bit integers
PHONE_NUMBER_MAX = 2**64 - 1

# GUI
WINDOW_TITLE = "Main Page"
POLL_INTERVAL_SEC = 2
NOTIFICATION_TITLE = "User Registry"
NOTIFICATION_TIMEOUT_SEC = 5

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
