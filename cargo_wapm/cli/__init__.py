"""Command-line interface for cargo-wapm."""
