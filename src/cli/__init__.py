"""Command line interface and process-level configuration."""
