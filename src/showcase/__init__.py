"""showcase — company website content API with store-outage fallback."""

__version__ = "0.1.0"
