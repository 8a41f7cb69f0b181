"""csssweep -- find and prune dead CSS selectors."""

__version__ = "0.1.0"
