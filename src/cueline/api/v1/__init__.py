"""CueLine REST API, version 1."""
