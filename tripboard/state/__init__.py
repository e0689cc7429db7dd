"""Session state: entity store and photo lightbox."""

from tripboard.state.lightbox import LightboxController
from tripboard.state.store import EntityStore

__all__ = ["EntityStore", "LightboxController"]
