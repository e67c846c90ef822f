"""
Authentication and authorization.

Responsibilities:
- Hash and verify passwords with bcrypt.
- Issue and verify one-hour HS256 bearer tokens.
- Store credentials with a unique email constraint.
- Guard protected routes with a bearer-token dependency.
"""
