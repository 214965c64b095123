"""sitectl: deployment descriptors for branch-per-environment static sites."""

__version__ = "0.3.0"
