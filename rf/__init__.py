"""rf - issue-driven release workflows."""

__version__ = "0.1.0"
