"""HTTP API for the trending dashboard."""
