"""Core data transformations for podembed."""
