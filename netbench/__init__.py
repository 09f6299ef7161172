"""Small network tools, games and text utilities."""

__version__ = "0.1.0"