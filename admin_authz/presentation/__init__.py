"""HTTP presentation layer (health endpoint and request middleware)."""
