"""toolshim command-line interface."""
