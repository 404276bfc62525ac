"""Application layer - entitlement dispatch and lifecycle orchestration.

The Authorizer turns resource lifecycle events into relationship tuple
mutations and gates startup on the store's authorization model. It holds
no business rules of its own: templates and the model live in the domain.
"""
