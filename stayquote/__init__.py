"""StayQuote — stay pricing and quote service."""

__version__ = "0.1.0"
