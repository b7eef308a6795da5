"""multilang — protocol message reader for child-process stdout."""

__version__ = "0.1.0"
