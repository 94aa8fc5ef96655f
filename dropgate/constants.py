"""
Constants used throughout the Dropgate package.

This module contains default values, notification identifiers and
user-facing strings used by various components. Import from here rather
than hardcoding values elsewhere.
"""

from pathlib import Path

# Version info
VERSION = "0.1.0"
APP_NAME = "Dropgate"

# Default paths
DEFAULT_CONFIG_DIR = Path.home() / ".dropgate"
DEFAULT_LOG_DIR = DEFAULT_CONFIG_DIR / "logs"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.json"

# Logging
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FILE_NAME = "dropgate.log"

# Notification identifiers
TRANSFER_NOTIFICATION_PREFIX = "transfer_"
ERROR_NOTIFICATION_PREFIX = "transferError_"
TRANSFER_ID_KEY = "transferID"

# Notification categories
CATEGORY_INCOMING_TRANSFERS = "INCOMING_TRANSFERS"
CATEGORY_ERRORS = "ERRORS"

# Notification action identifiers
ACTION_ACCEPT = "ACCEPT"
ACTION_DECLINE = "DECLINE"

# Notification text
PIN_CODE_FORMAT = "PIN: {pin}"
RECEIVING_FILES_FORMAT = "Receiving {files} from {device}"
DEVICE_SENDING_FILES_FORMAT = "{device} is sending you {files}"
N_FILES_FORMAT = "{count} files"
TRANSFER_ERROR_TITLE_FORMAT = "Failed to receive files from {device}"

# Error messages shown to the user
ERROR_MESSAGE_IO = "I/O Error"
ERROR_MESSAGE_PROTOCOL = "Communication error"
ERROR_MESSAGE_CRYPTO = "Encryption error"
