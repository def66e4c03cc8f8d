"""Severity threshold checks and stdlib logging level mapping."""

import logging

from pogrlog.core.models import Severity

# Stdlib has no TRACE level; hosts that want one can register this number.
TRACE = 5


def admits(candidate: Severity, threshold: Severity) -> bool:
    """Return True if a record of the candidate severity passes the threshold.

    Args:
        candidate: Severity of the log call.
        threshold: Minimum configured severity.

    Returns:
        True when candidate is at least as severe as threshold.
    """
    return candidate >= threshold


def from_logging_level(levelno: int) -> Severity:
    """Map a stdlib logging level number onto a Severity.

    CRITICAL and ERROR map to ERROR, WARNING to WARN, INFO to INFO,
    DEBUG to DEBUG and anything below DEBUG to TRACE.
    """
    if levelno >= logging.ERROR:
        return Severity.ERROR
    if levelno >= logging.WARNING:
        return Severity.WARN
    if levelno >= logging.INFO:
        return Severity.INFO
    if levelno >= logging.DEBUG:
        return Severity.DEBUG
    return Severity.TRACE


def to_logging_level(severity: Severity) -> int:
    """Map a Severity onto the stdlib logging level number."""
    return {
        Severity.ERROR: logging.ERROR,
        Severity.WARN: logging.WARNING,
        Severity.INFO: logging.INFO,
        Severity.DEBUG: logging.DEBUG,
        Severity.TRACE: TRACE,
    }[severity]
