"""Lifecycle states of an Authorizer.

CONSTRUCTED → VALIDATING_MODEL → READY → DRAINING → STOPPED

A failed model validation is terminal for the process; there is no
degraded state.
"""

from enum import Enum


class AuthorizerState(str, Enum):
    """Authorizer lifecycle states."""

    CONSTRUCTED = "constructed"
    VALIDATING_MODEL = "validating_model"
    READY = "ready"
    DRAINING = "draining"
    STOPPED = "stopped"
