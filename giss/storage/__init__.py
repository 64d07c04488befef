"""Local persistence for giss."""

from .usernames import UsernameResolver, hash_token

__all__ = ["UsernameResolver", "hash_token"]
