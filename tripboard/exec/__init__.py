"""Asynchronous call sequencing."""

from tripboard.exec.debounce import Debouncer, SequenceToken

__all__ = ["Debouncer", "SequenceToken"]
