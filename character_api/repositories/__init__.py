"""
Persistence adapters.

Collections are JSON snapshots: the Git hosting repository is the durable
copy, the local file is the fast path and the offline fallback. Services
depend on `JsonCollection.load()/save()` and never touch either store.
"""
