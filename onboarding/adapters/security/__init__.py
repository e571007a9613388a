"""Security adapters - Password hashing."""

from .bcrypt_encoder import BcryptPasswordEncoder

__all__ = ["BcryptPasswordEncoder"]
