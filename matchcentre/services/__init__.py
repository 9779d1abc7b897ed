"""Endpoint-level services: fixed queries plus composition per resource."""
