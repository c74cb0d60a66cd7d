"""Commander supply monitor: configuration discovery from the database sheet."""

__version__ = "0.1.0"
