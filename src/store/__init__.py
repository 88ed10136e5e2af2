"""Entity storage layer.

This module holds the identity-keyed in-memory store and the persistent
log that snapshots an ordered entity sequence to a JSON file.
"""
