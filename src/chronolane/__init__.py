"""chronolane — temporal layout engine for lane-based chronological charts."""

__version__ = "0.1.0"
