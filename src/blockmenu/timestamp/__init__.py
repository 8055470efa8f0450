"""Timestamp editing: session store, submit coordination, date picker."""

from .picker import DatePicker, PickerView
from .session import SessionClosed, TimestampController, TimestampSession
from .submit import SubmitCoordinator

__all__ = [
    "DatePicker",
    "PickerView",
    "SessionClosed",
    "SubmitCoordinator",
    "TimestampController",
    "TimestampSession",
]
