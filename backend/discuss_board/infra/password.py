"""Centralized password hashing configuration.

All modules hashing or verifying member passwords import from here so the
Argon2id parameters stay consistent. Cost parameters come from settings;
tests lower them to keep account creation fast.
"""

from __future__ import annotations

import re

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from discuss_board.settings import settings

_ADMIN_PASSWORD_RULES = (
	re.compile(r"[a-z]"),
	re.compile(r"[A-Z]"),
	re.compile(r"[0-9]"),
	re.compile(r"[^A-Za-z0-9]"),
)
ADMIN_PASSWORD_MIN_LENGTH = 10


def _hasher() -> PasswordHasher:
	return PasswordHasher(
		time_cost=settings.password_time_cost,
		memory_cost=settings.password_memory_cost,
		parallelism=4,
		hash_len=32,
		salt_len=16,
	)


def hash_password(password: str) -> str:
	"""Hash a password using Argon2id."""
	return _hasher().hash(password)


def verify_password(hash: str, password: str) -> bool:
	"""Return True when the password matches the stored hash."""
	try:
		return _hasher().verify(hash, password)
	except (VerificationError, InvalidHashError):
		return False


def is_strong_admin_password(password: str) -> bool:
	"""Administrator passwords need length plus upper, lower, digit and symbol."""
	if len(password) < ADMIN_PASSWORD_MIN_LENGTH:
		return False
	return all(rule.search(password) for rule in _ADMIN_PASSWORD_RULES)
