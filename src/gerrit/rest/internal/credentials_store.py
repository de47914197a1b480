"""Gerrit credentials kept in the system keyring, one entry per profile.

An entry holds ``{"username": ..., "password": ...}`` as JSON. For Cookie
authentication the pair is the cookie name and value.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from gerrit.rest.auth import Credential

SERVICE_NAME = "gerrit-rest-credentials"
DEFAULT_PROFILE = "default"

logger = logging.getLogger(__name__)


def _get_keyring():
    """Return the keyring module when a backend that can store secrets is configured."""
    try:
        import keyring

        backend = keyring.get_keyring()
    except Exception:
        return None
    # keyring falls back to keyring.backends.fail.Keyring, which rejects every call
    if "fail" in type(backend).__name__.lower():
        return None
    return keyring


def _encode(creds: Credential) -> str:
    return json.dumps({"username": creds.name, "password": creds.secret})


def _decode(stored: str) -> Credential:
    data = json.loads(stored)
    return Credential(name=data["username"], secret=data["password"])


def load_credentials(profile: str = DEFAULT_PROFILE) -> Optional[Credential]:
    """Return the credentials stored for profile, or None."""
    kr = _get_keyring()
    if kr is None:
        return None
    try:
        stored = kr.get_password(SERVICE_NAME, profile)
        return _decode(stored) if stored is not None else None
    except Exception:
        logger.debug(f"Ignoring unreadable keyring entry for profile={profile}", exc_info=True)
        return None


def save_credentials(creds: Credential, profile: str = DEFAULT_PROFILE) -> None:
    """Store credentials for profile, replacing an existing entry.

    Raises:
        RuntimeError: If no usable keyring backend is available
    """
    kr = _get_keyring()
    if kr is None:
        raise RuntimeError(
            "No usable keyring backend available. Install one with 'pip install gerrit-rest[keyring]' "
            "or provide GERRIT_USERNAME and GERRIT_PASSWORD instead."
        )
    kr.set_password(SERVICE_NAME, profile, _encode(creds))
    logger.debug(f"Stored credentials for profile={profile}")


def clear_credentials(profile: str = DEFAULT_PROFILE) -> None:
    """Remove the entry for profile. Missing entries and backends are ignored."""
    kr = _get_keyring()
    if kr is None:
        return
    try:
        kr.delete_password(SERVICE_NAME, profile)
    except Exception:
        logger.debug(f"No keyring entry removed for profile={profile}", exc_info=True)
        return
    logger.debug(f"Removed credentials for profile={profile}")
