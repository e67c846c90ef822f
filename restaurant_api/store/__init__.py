"""
Document store layer.

Responsibilities:
- Expose a small collection API (find, insert, replace, delete by id).
- Back it with MongoDB in production and an in-process store for local runs and tests.
- Translate backend failures into StorageError and unique-index violations into DuplicateKeyError.
"""
