"""Main window mixins."""
