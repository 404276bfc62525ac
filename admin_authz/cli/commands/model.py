"""Authorization model provisioning command."""

from __future__ import annotations

from argparse import Namespace

from admin_authz.domain.authorization import AUTH_MODEL

from ..runtime import open_client, unwrap

__all__ = ["create_model"]


async def create_model(args: Namespace) -> None:
    """Publish the packaged model, creating a store first when none is given.

    Prints the ids as environment assignments so the output can be pasted
    into the service configuration.
    """
    async with open_client(args) as client:
        if not client.store_id:
            unwrap(await client.create_store(args.store_name), "Failed to create store")
        model_id = unwrap(
            await client.write_model(AUTH_MODEL), "Failed to write authorization model"
        )
        store_id = client.store_id

    print(f"OPENFGA_STORE_ID={store_id}")
    print(f"OPENFGA_AUTHORIZATION_MODEL_ID={model_id}")
