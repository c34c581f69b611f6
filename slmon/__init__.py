"""Status monitor that joins system information into one status line."""

__version__ = "1.0.0"