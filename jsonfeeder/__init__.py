"""jsonfeeder — build JSON Feed documents from posts."""
__version__ = "1.0.0"
