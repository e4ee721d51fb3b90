"""vidctl — aspect field metadata and completion criteria for video production."""

__version__ = "0.1.0"
