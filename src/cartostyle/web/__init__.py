"""HTTP API for the styling engine."""
