"""A minimal content-addressed version control system."""

__version__ = "0.1.0"
