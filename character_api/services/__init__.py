"""
High-level use cases for the character API.

Each service loads the collections it needs from the DataStore, applies the
change in memory and saves the whole collection back. Routers call these
services instead of touching the JSON snapshots directly.
"""
