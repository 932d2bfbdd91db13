"""Invitation token helpers. Raw tokens go out by email; only hashes are stored."""

import hashlib
import secrets
from datetime import timedelta

from django.conf import settings
from django.utils import timezone


def generate_invite_token() -> str:
    # 32 random bytes, 64 hex chars
    return secrets.token_hex(32)


def hash_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode('utf-8')).hexdigest()


def invite_expiry():
    return timezone.now() + timedelta(hours=settings.INVITE_TTL_HOURS)


def invite_link(raw_token: str) -> str:
    return f"{settings.CLIENT_URL.rstrip('/')}/invite/{raw_token}"
