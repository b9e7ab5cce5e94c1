# core/errors/catalog.py
"""
Static lookup tables behind ErrorHandler.

Every table is keyed by FailureKind, then by error code. The ``None`` key of
an inner table holds the kind's fallback; tables are wrapped in
MappingProxyType so they stay read-only for the lifetime of the process.
"""
from __future__ import annotations

from datetime import timedelta
from types import MappingProxyType
from typing import Mapping

from core.failures import FailureKind

UNKNOWN_CODE = "UNKNOWN"

DB_SYSTEM_ERROR = "DB_SYSTEM_ERROR"
STOR_SYSTEM_ERROR = "STOR_SYSTEM_ERROR"
DATA_FORMAT_ERROR = "DATA_FORMAT_ERROR"
VAL_SYSTEM_ERROR = "VAL_SYSTEM_ERROR"
DATA_STATE_ERROR = "DATA_STATE_ERROR"
NET_TIMEOUT = "NET_TIMEOUT"
NET_CONNECTION_ERROR = "NET_CONNECTION_ERROR"
SYSTEM_UNEXPECTED_ERROR = "SYSTEM_UNEXPECTED_ERROR"

GENERIC_USER_MESSAGE = "Something went wrong. Please try again."
GENERIC_SUGGESTIONS: tuple[str, ...] = (
    "Please try again.",
    "If the problem persists, contact support.",
)


def _freeze(table: dict) -> Mapping:
    return MappingProxyType({key: MappingProxyType(inner) for key, inner in table.items()})


USER_MESSAGES: Mapping[FailureKind, Mapping[str | None, str]] = _freeze(
    {
        FailureKind.DATABASE: {
            "DB_002": "Unable to connect to the database. Please restart the app.",
            "DB_003": "Unable to retrieve your data. Please try again.",
            "DB_004": "App update failed. Please reinstall the app.",
            "DB_005": "Data validation error. Please check your input.",
            None: "Unable to save your data. Please try again.",
        },
        FailureKind.AUTH: {
            "AUTH_002": "Sign-in failed. Please try again.",
            "AUTH_004": "User account not found. Please sign in.",
            "AUTH_005": "Your session has expired. Please sign in again.",
            "AUTH_006": "You don't have permission to perform this action.",
            "AUTH_007": "Invalid credentials. Please check and try again.",
            None: "Authentication failed. Please sign in again.",
        },
        FailureKind.VALIDATION: {
            "VAL_002": "Please fill in all required fields.",
            "VAL_003": "Please check the format of your input.",
            "VAL_004": "Please enter a value within the valid range.",
            "VAL_006": "Please enter a valid email address.",
            "VAL_007": "Please enter a valid date.",
            None: "Please check your input and try again.",
        },
        FailureKind.STORAGE: {
            "STOR_002": "Unable to load your settings. Using defaults.",
            "STOR_003": "Unable to save your settings. Please try again.",
            "STOR_004": "Storage initialization failed. Please restart the app.",
            "STOR_005": "Storage permission denied. Please check app permissions.",
            "STOR_007": "Storage space full. Please free up some space.",
            None: "Unable to access local storage. Please try again.",
        },
        FailureKind.NETWORK: {
            "NET_002": "No internet connection. Please check your network.",
            "NET_003": "Request timed out. Please try again.",
            "NET_004": "Server error. Please try again later.",
            "NET_005": "Invalid request. Please contact support.",
            "NET_006": "Authentication required. Please sign in.",
            None: "Network error. Please check your connection.",
        },
        FailureKind.CONFIGURATION: {
            "CONF_002": "App configuration incomplete. Please reinstall.",
            "CONF_004": "App initialization failed. Please restart.",
            None: "Configuration error. Please restart the app.",
        },
        FailureKind.DATA: {
            "DATA_002": "Unable to process data. Please contact support.",
            "DATA_004": "Requested data not found.",
            "DATA_005": "Data appears to be corrupted. Please contact support.",
            DATA_FORMAT_ERROR: "Data format error. Please contact support.",
            None: "Unable to process data. Please try again.",
        },
    }
)

# Kinds listed here ignore the code table entirely.
ALWAYS_UNRECOVERABLE = frozenset({FailureKind.VALIDATION, FailureKind.CONFIGURATION})

RECOVERABILITY: Mapping[FailureKind, Mapping[str | None, bool]] = _freeze(
    {
        FailureKind.DATABASE: {
            "DB_002": True,
            "DB_003": True,
            "DB_006": True,
            "DB_004": False,
            "DB_005": False,
            "DB_008": False,
            None: True,
        },
        FailureKind.STORAGE: {
            "STOR_002": True,
            "STOR_003": True,
            "STOR_004": False,
            "STOR_005": False,
            "STOR_007": False,
            None: True,
        },
        FailureKind.NETWORK: {
            "NET_002": True,
            "NET_003": True,
            "NET_004": True,
            "NET_005": False,
            "NET_006": False,
            "NET_007": False,
            None: True,
        },
        FailureKind.AUTH: {
            "AUTH_002": True,
            "AUTH_003": True,
            "AUTH_004": False,
            "AUTH_005": False,
            "AUTH_006": False,
            "AUTH_007": False,
            None: True,
        },
        FailureKind.DATA: {
            "DATA_003": True,
            "DATA_004": True,
            "DATA_002": False,
            "DATA_005": False,
            DATA_FORMAT_ERROR: False,
            None: True,
        },
    }
)

_RETRY_AGAIN = ("Try again.", "Restart the app if the problem persists.")

RECOVERY_SUGGESTIONS: Mapping[FailureKind, Mapping[str | None, tuple[str, ...]]] = _freeze(
    {
        FailureKind.DATABASE: {
            "DB_002": ("Restart the app.", "Free up device storage space."),
            "DB_003": ("Try again in a moment.", "Restart the app if the problem persists."),
            "DB_004": ("Reinstall the app.", "Contact support if the problem persists."),
            "DB_005": ("Check your input data.", "Ensure all required fields are filled."),
            None: _RETRY_AGAIN,
        },
        FailureKind.STORAGE: {
            "STOR_005": (
                "Check app permissions in device settings.",
                "Grant storage access to the app.",
            ),
            "STOR_007": (
                "Free up device storage space.",
                "Clear app cache in device settings.",
            ),
            None: _RETRY_AGAIN,
        },
        FailureKind.NETWORK: {
            "NET_002": (
                "Check your internet connection.",
                "Try switching between WiFi and mobile data.",
            ),
            "NET_003": (
                "Check your internet connection.",
                "Try again with a better connection.",
            ),
            "NET_004": ("Try again later.", "The server may be temporarily unavailable."),
            None: ("Check your internet connection.", "Try again in a moment."),
        },
        FailureKind.AUTH: {
            "AUTH_004": ("Please sign in again.", "Your session may have expired."),
            "AUTH_005": ("Please sign in again.", "Your session may have expired."),
            "AUTH_007": ("Check your credentials.", "Try signing in again."),
            None: ("Try signing in again.", "Contact support if the problem persists."),
        },
        FailureKind.VALIDATION: {
            None: ("Please correct the highlighted fields and try again.",),
        },
        FailureKind.CONFIGURATION: {
            None: ("Please restart the app.", "If the problem persists, reinstall the app."),
        },
        FailureKind.DATA: {
            "DATA_002": ("Contact support.", "This appears to be a data integrity issue."),
            "DATA_005": ("Contact support.", "This appears to be a data integrity issue."),
            "DATA_004": (
                "Try refreshing the data.",
                "The requested information may have been moved.",
            ),
            None: ("Try again.", "Contact support if the problem persists."),
        },
    }
)

# (step per attempt, floor, ceiling); kinds missing here use DEFAULT_RETRY_POLICY.
RETRY_POLICIES: Mapping[FailureKind, tuple[timedelta, timedelta, timedelta]] = MappingProxyType(
    {
        FailureKind.DATABASE: (timedelta(milliseconds=500), timedelta(0), timedelta(seconds=30)),
        FailureKind.STORAGE: (timedelta(milliseconds=500), timedelta(0), timedelta(seconds=30)),
        FailureKind.NETWORK: (timedelta(seconds=2), timedelta(seconds=1), timedelta(seconds=30)),
        FailureKind.AUTH: (timedelta(seconds=3), timedelta(seconds=2), timedelta(seconds=60)),
    }
)
DEFAULT_RETRY_POLICY = (timedelta(seconds=1), timedelta(0), timedelta(seconds=30))


__all__ = [
    "ALWAYS_UNRECOVERABLE",
    "DATA_FORMAT_ERROR",
    "DATA_STATE_ERROR",
    "DB_SYSTEM_ERROR",
    "DEFAULT_RETRY_POLICY",
    "GENERIC_SUGGESTIONS",
    "GENERIC_USER_MESSAGE",
    "NET_CONNECTION_ERROR",
    "NET_TIMEOUT",
    "RECOVERABILITY",
    "RECOVERY_SUGGESTIONS",
    "RETRY_POLICIES",
    "STOR_SYSTEM_ERROR",
    "SYSTEM_UNEXPECTED_ERROR",
    "UNKNOWN_CODE",
    "USER_MESSAGES",
    "VAL_SYSTEM_ERROR",
]
