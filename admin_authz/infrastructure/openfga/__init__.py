"""OpenFGA relationship store adapters."""

from admin_authz.infrastructure.openfga.client import OpenFGAClient
from admin_authz.infrastructure.openfga.noop_client import NoopAuthorizationClient

__all__ = ["NoopAuthorizationClient", "OpenFGAClient"]
