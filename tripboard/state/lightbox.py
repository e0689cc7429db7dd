"""Cyclic photo viewer state."""

from __future__ import annotations

from collections.abc import Sequence

from tripboard.models.common import PhotoRef


class LightboxController:
    """Holds the open photo sequence and the index being viewed."""

    def __init__(self) -> None:
        self.photos: tuple[PhotoRef, ...] | None = None
        self.index = 0

    @property
    def is_open(self) -> bool:
        return bool(self.photos)

    @property
    def current(self) -> PhotoRef | None:
        if not self.photos:
            return None
        return self.photos[self.index]

    def open(self, photos: Sequence[PhotoRef], index: int = 0) -> None:
        """Show ``photos`` starting at ``index``; an empty sequence stays closed."""
        if not photos:
            self.close()
            return
        if not 0 <= index < len(photos):
            raise IndexError(f"Photo index {index} out of range")
        self.photos = tuple(photos)
        self.index = index

    def next(self) -> int:
        if self.photos:
            self.index = 0 if self.index == len(self.photos) - 1 else self.index + 1
        return self.index

    def previous(self) -> int:
        if self.photos:
            self.index = len(self.photos) - 1 if self.index == 0 else self.index - 1
        return self.index

    def close(self) -> None:
        # Drop the reference, not just hide it
        self.photos = None
        self.index = 0
