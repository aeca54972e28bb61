"""taskmirror: an in-memory, write-through mirror of a user's tasks."""

__version__ = "0.1.0"
