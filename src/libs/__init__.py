"""Shared library helpers."""

from src.libs.notifier import LogNotifier, NotifierProtocol, get_notifier

__all__ = [
    "LogNotifier",
    "NotifierProtocol",
    "get_notifier",
]
