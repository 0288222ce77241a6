"""HTTP server for podembed."""
