"""
Core utilities shared across the character API.

This package hosts:
- configuration helpers (env vars, storage paths, provider selection)
- password hashing
- the error taxonomy the HTTP layer turns into `{error}` bodies
- small id/timestamp helpers
"""
