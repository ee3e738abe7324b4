"""Navigation engine, animation and I/O services."""
