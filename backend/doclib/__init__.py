"""Document library backend: folder/document store with a moderation queue."""

__version__ = "1.0.0"
