"""
User accounts and profiles.

Responsibilities:
- Register and authenticate users with bcrypt-hashed passwords.
- Hold each user's declared interest and home address.
- Expose session-based FastAPI dependencies.
"""
