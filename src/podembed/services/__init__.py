"""Network-facing services for podembed."""
