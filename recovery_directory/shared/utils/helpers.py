# 📄 File: recovery_directory/shared/utils/helpers.py

# 🧭 Purpose (Layman Explanation):
# Small everyday tools used throughout the directory: making web-friendly names for
# listings, stamping times, and remembering where the last page of results ended.

# 🧪 Purpose (Technical Summary):
# Pure helper functions: slug generation, UTC timestamps, id generation,
# opaque keyset-pagination cursors, and "City, State" parsing.

# 🔗 Dependencies:
# re, uuid, base64, json, datetime

# 🔄 Connected Modules / Calls From:
# Domain services (slugs, timestamps), repository implementations (cursors),
# location_service (city parsing), storage (random file names)

import base64
import binascii
import json
import re
import secrets
import uuid
from datetime import datetime, timezone
from typing import Optional, Tuple

from recovery_directory.shared.core.exceptions import ValidationError


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_aware(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes coming back from the database as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def generate_id() -> str:
    """New primary key for any entity."""
    return str(uuid.uuid4())


def random_token(length: int = 8) -> str:
    """Short lowercase alphanumeric token for file names."""
    alphabet = 'abcdefghijklmnopqrstuvwxyz0123456789'
    return ''.join(secrets.choice(alphabet) for _ in range(length))


def generate_slug(text: str, max_length: int = 50) -> str:
    """
    Generate URL-friendly slug from text.

    Args:
        text: Text to convert to slug
        max_length: Maximum slug length

    Returns:
        URL-friendly slug
    """
    if not text:
        return ""

    slug = text.lower()
    slug = re.sub(r'[^\w\s-]', '', slug)
    slug = re.sub(r'[-\s_]+', '-', slug)
    slug = slug.strip('-')

    if len(slug) > max_length:
        slug = slug[:max_length].rstrip('-')

    return slug


def facility_slug(name: str, location: Optional[str]) -> str:
    """Slug for a listing, built from its name and "City, State" location."""
    return generate_slug(f"{name or ''} {location or ''}", max_length=120)


def parse_city_state(location: Optional[str]) -> Tuple[str, str]:
    """
    Split "City, State" into its parts.

    Text without a comma is treated as a city with no state.
    """
    if not location:
        return "", ""
    parts = [part.strip() for part in location.split(',')]
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


# ==============================================================================
# CURSOR PAGINATION
# ==============================================================================

def encode_cursor(created_at: datetime, item_id: str) -> str:
    """Opaque cursor pointing just past (created_at, id) in newest-first order."""
    payload = json.dumps({"c": created_at.isoformat(), "i": item_id}, separators=(',', ':'))
    return base64.urlsafe_b64encode(payload.encode('utf-8')).decode('ascii').rstrip('=')


def decode_cursor(cursor: str) -> Tuple[datetime, str]:
    """
    Reverse encode_cursor.

    Raises:
        ValidationError: if the cursor was not produced by encode_cursor
    """
    try:
        padded = cursor + '=' * (-len(cursor) % 4)
        payload = json.loads(base64.urlsafe_b64decode(padded.encode('ascii')))
        created_at = datetime.fromisoformat(payload["c"])
        item_id = str(payload["i"])
    except (binascii.Error, ValueError, KeyError, TypeError, UnicodeError) as e:
        raise ValidationError("Invalid pagination cursor", field="cursor", value=cursor) from e

    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at, item_id
