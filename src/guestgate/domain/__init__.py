"""Domain layer: roles, callers and the services that act on them."""
