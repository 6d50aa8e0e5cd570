"""gitlet - content-addressed commit objects for a minimal version control system."""

__version__ = "0.1.0"
