"""Domain layer: entities, enums, errors, protocols and the authorization model."""
