"""Client for the Comick manga catalogue API: URLs, response parsing and a fetching source."""

__version__ = "0.1.0"
__all__ = ["models", "urls", "parsing", "source"]