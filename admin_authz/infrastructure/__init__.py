"""Infrastructure adapters (store client, worker pool, logging, observability)."""
