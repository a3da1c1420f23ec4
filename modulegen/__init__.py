"""modulegen -- generate folders and files from a tab-indented outline."""

__version__ = "0.1.0"
