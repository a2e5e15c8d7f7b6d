"""BusTrack school bus fleet backend."""

__version__ = "0.1.0"
