"""
auth — credential-issuance core.

Provides:
  • Signup / login input validation
  • Password hashing (bcrypt)
  • Signed, expiring bearer tokens (HS256 JWT)
  • ``AuthWorkflow`` orchestrating signup and login over a ``CredentialStore``
  • FastAPI routes and the ``get_current_subject`` dependency
"""
