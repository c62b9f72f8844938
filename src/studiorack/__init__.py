"""StudioRack - audio plugin manager for music projects."""

__version__ = "0.4.0"
