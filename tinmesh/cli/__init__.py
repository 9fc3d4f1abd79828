"""Command-line tools for tinmesh."""
