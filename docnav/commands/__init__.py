"""Command implementations behind the docnav CLI."""
