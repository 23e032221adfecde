"""
Identity boundary: passwords (Argon2), JWT access tokens and request sessions.

Import the FastAPI dependencies from `teamtasks.identity.auth_users`.
"""
