"""Runtime environments.

Settings use the environment to pick JSON logs (anything but development)
over the colored console renderer.
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
