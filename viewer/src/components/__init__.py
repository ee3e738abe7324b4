"""Qt widgets for the layer viewer."""
