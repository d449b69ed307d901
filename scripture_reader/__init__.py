"""Scripture Reader - reading state, favorites and preferences for a Bible companion."""

__version__ = "0.0.12"
