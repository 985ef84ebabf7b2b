"""HTTP API for the swap math."""
