"""
Character backend: projects, characters and character images over JSON
snapshots kept on local disk and mirrored to a Git hosting repository.
"""
