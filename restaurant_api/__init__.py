"""
Restaurant API.

Responsibilities:
- Register and authenticate users with bcrypt-hashed credentials.
- Issue and verify signed, time-limited bearer tokens.
- Serve CRUD and case-insensitive search over restaurant documents.
"""
