"""Embedded authorization model.

The model ships as package data (``authorization_model.json``) and is
loaded once at import. It is what the create-model command publishes and
what the running service expects to find in the store.
"""

import json
from importlib import resources

from admin_authz.domain.entities import AuthorizationModel

MODEL_RESOURCE = "authorization_model.json"


def load_authorization_model(resource: str = MODEL_RESOURCE) -> AuthorizationModel:
    """Load an authorization model bundled with this package.

    Raises:
        ValueError: If the resource is not a valid model document.
    """
    raw = resources.files(__package__).joinpath(resource).read_text(encoding="utf-8")
    return AuthorizationModel.from_dict(json.loads(raw))


AUTH_MODEL: AuthorizationModel = load_authorization_model()
