"""Offline administration commands (``admin-authz``)."""
