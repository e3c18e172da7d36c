"""flutter-cache-cleaner - find and safely clean Flutter caches."""

__version__ = "0.1.0"
