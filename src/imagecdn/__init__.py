"""Image upload and static serving gateway."""

__version__ = "0.1.0"
