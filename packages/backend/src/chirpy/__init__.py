"""Chirpy — a small social-posting service.

Users register, log in, and post short "chirps". The interesting part
is the auth layer: bcrypt credentials, stateless JWT access tokens,
server-tracked refresh tokens, and per-chirp ownership checks.
"""

__version__ = "0.1.0"
