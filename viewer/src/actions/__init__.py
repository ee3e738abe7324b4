"""Menu action handlers for the main window."""
