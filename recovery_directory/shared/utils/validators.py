# 📄 File: recovery_directory/shared/utils/validators.py
# 🧭 Purpose (Layman Explanation):
# Checks that data typed in by visitors and owners is sensible: an email looks like
# an email, a website is a real web address, and a new listing has the basics filled in.
# 🧪 Purpose (Technical Summary):
# Reusable validation helpers: claim contact checks, email/website domain matching
# for claim auto-approval, facility required-field checks, and upload metadata checks.
# 🔗 Dependencies:
# re, urllib.parse, typing
# 🔄 Connected Modules / Calls From:
# facility_claims claim_service, facility_directory facility_service,
# shared.infrastructure.storage.supabase_storage

import re
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
WEBSITE_SCHEMES = ('http', 'https')

# Fields a facility must carry before it is stored
FACILITY_REQUIRED_FIELDS = {
    'name': 'Name is required',
    'description': 'Description is required',
    'location': 'Location is required',
    'city': 'City is required',
    'state': 'State is required',
    'phone': 'Phone is required',
    'email': 'Email is required',
}


class ValidationResult:
    """Result object for validation operations"""
    def __init__(self, is_valid: bool = True, errors: Optional[List[str]] = None):
        self.is_valid = is_valid
        self.errors = errors or []

    def add_error(self, error: str):
        self.errors.append(error)
        self.is_valid = False


# ==============================================================================
# CONTACT VALIDATION
# ==============================================================================

def is_valid_email(email: Optional[str]) -> bool:
    """Loose shape check: something@something.tld with no whitespace."""
    if not email or not isinstance(email, str):
        return False
    return bool(EMAIL_PATTERN.match(email.strip()))


def is_valid_website(url: Optional[str]) -> bool:
    """A website must parse with an http(s) scheme and a host."""
    if not url or not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return parsed.scheme in WEBSITE_SCHEMES and bool(parsed.hostname)


def _website_host(website: str) -> str:
    candidate = website.strip()
    if '://' not in candidate:
        candidate = f'https://{candidate}'
    host = (urlparse(candidate).hostname or '').lower()
    if host.startswith('www.'):
        host = host[4:]
    return host


def _last_two_labels(host: str) -> str:
    labels = [label for label in host.split('.') if label]
    return '.'.join(labels[-2:])


def domains_match(email: Optional[str], website: Optional[str]) -> bool:
    """
    Compare the email's domain with the website's hostname.

    Both sides are lowercased, a leading "www." is dropped from the host, and
    only the last two dot labels are compared. This is not public-suffix aware:
    "a.co.uk" and "b.co.uk" compare equal. Anything unparseable is a mismatch.

        >>> domains_match("staff@riverside.com", "https://www.riverside.com")
        True
        >>> domains_match("staff@gmail.com", "https://riverside.com")
        False
    """
    if not email or not website or '@' not in email:
        return False
    try:
        email_domain = email.rsplit('@', 1)[1].strip().lower()
        host = _website_host(website)
    except (ValueError, AttributeError):
        return False

    if not email_domain or not host:
        return False

    email_root = _last_two_labels(email_domain)
    host_root = _last_two_labels(host)
    return bool(email_root) and email_root == host_root


# ==============================================================================
# FACILITY VALIDATION
# ==============================================================================

def validate_facility_data(data: Dict[str, Any]) -> ValidationResult:
    """
    Check a new facility payload for required fields and coordinate shape.

    Every problem is collected so the owner sees the whole list at once.
    """
    result = ValidationResult()

    for field, message in FACILITY_REQUIRED_FIELDS.items():
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            result.add_error(message)

    email = data.get('email')
    if email and not is_valid_email(email):
        result.add_error('Email is invalid')

    website = data.get('website')
    if website and not is_valid_website(website):
        result.add_error('Website must be an http(s) URL')

    coordinates = data.get('coordinates')
    if coordinates is not None:
        lat = coordinates.get('lat') if isinstance(coordinates, dict) else getattr(coordinates, 'lat', None)
        lng = coordinates.get('lng') if isinstance(coordinates, dict) else getattr(coordinates, 'lng', None)
        if not isinstance(lat, (int, float)) or not isinstance(lng, (int, float)):
            result.add_error('Valid coordinates are required')
        elif not (-90 <= lat <= 90 and -180 <= lng <= 180):
            result.add_error('Coordinates are out of range')

    rating = data.get('rating')
    if rating is not None and not (0 <= rating <= 5):
        result.add_error('Rating must be between 0 and 5')

    return result


# ==============================================================================
# FILE VALIDATION
# ==============================================================================

def validate_image_upload(content_type: Optional[str], file_size: int, max_size: int) -> ValidationResult:
    """Upload metadata check: image/* and within the size limit."""
    result = ValidationResult()

    if not content_type or not content_type.startswith('image/'):
        result.add_error('Only image uploads are allowed')
    if file_size <= 0:
        result.add_error('File is empty')
    elif file_size > max_size:
        result.add_error(f'File size exceeds maximum allowed size ({max_size // (1024 * 1024)}MB)')

    return result
