"""Live per-category summaries of recently active Discord threads."""

__version__ = "0.1.0"
