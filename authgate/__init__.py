"""User registration and login with hashed passwords, access tokens and an HTTP gateway."""

__version__ = "0.1.0"