"""Test suite for the authorization synchronization engine.

Test structure:
- unit/: Unit tests - pool, Authorizer, domain model, config, CLI
- integration/: Adapters against a mocked HTTP server (OpenFGA client, app lifespan)
- utils/: Shared fakes

No test needs a running OpenFGA server.
"""
