"""CueLine command-line interface."""
