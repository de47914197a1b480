import json
import os
from pathlib import Path
from typing import Optional, Union
from urllib.parse import quote, urlsplit, urlunsplit

from gerrit.rest.auth import Credential
from gerrit.rest.internal import credentials_store

ANY_AUTH_TYPE = Union[str, os.PathLike, tuple, Credential, dict, None]

REQUIRED_CREDENTIALS_FILE_KEYS = [
    "username",
    "password",
]

KEYRING_SCHEME = "keyring://"


def parse_credentials(path: Union[str, os.PathLike, dict]) -> Credential:
    if isinstance(path, dict):
        credentials = path
    else:
        try:
            credentials = json.loads(Path(path).read_text())
        except FileNotFoundError:
            raise FileNotFoundError(f"Could not find Gerrit credentials file at {path}") from None

    if not isinstance(credentials, dict):
        raise AttributeError(f"Could not json dict from {path}")

    for k in REQUIRED_CREDENTIALS_FILE_KEYS:
        if k not in credentials:
            raise KeyError(f"Missing key {k} in credentials file")

    return Credential(name=credentials["username"], secret=credentials["password"])


def get_credentials_from_env() -> tuple[Optional[str], Optional[str]]:
    creds = os.getenv("GERRIT_CREDENTIALS")
    if creds:
        credential = parse_credentials(creds)
        return credential.name, credential.secret

    username = os.getenv("GERRIT_USERNAME")
    password = os.getenv("GERRIT_PASSWORD")

    if username and password is not None:
        return username, password

    keyring_creds = credentials_store.load_credentials()
    if keyring_creds:
        return keyring_creds.name, keyring_creds.secret

    return username, password


def resolve_credentials(auth: ANY_AUTH_TYPE = None) -> tuple[Optional[str], Optional[str]]:
    """Resolve (username, password) from any supported form of credentials.

    Falls back to the GERRIT_* environment variables and then the default keyring
    profile when auth is None.
    """
    username: Optional[str] = None
    password: Optional[str] = None

    if isinstance(auth, tuple):
        if len(auth) != 2:
            raise ValueError("Credentials tuple must be tuple of (username, password)")
        username, password = auth
    elif isinstance(auth, Credential):
        username, password = auth.name, auth.secret
    elif isinstance(auth, dict):
        creds = parse_credentials(auth)
        username, password = creds.name, creds.secret
    elif isinstance(auth, (str, os.PathLike)):
        path = str(auth)
        if path.startswith(KEYRING_SCHEME):
            profile = path[len(KEYRING_SCHEME) :]
            keyring_creds = credentials_store.load_credentials(profile)
            if keyring_creds is None:
                raise ValueError(
                    f"No credentials found in keyring for profile '{profile}'. "
                    f"Run 'gerrit-rest credentials put <file> --env {profile}' to store them."
                )
            username, password = keyring_creds.name, keyring_creds.secret
        elif not path.endswith(".json"):
            raise ValueError(f"Bad credentials file, must be json: {path}")
        else:
            creds = parse_credentials(auth)
            username, password = creds.name, creds.secret
    elif auth is not None:
        raise ValueError(f"Unsupported auth type: {type(auth)}")

    if not username and not password:
        username, password = get_credentials_from_env()

    return username, password


def with_credentials(url: str, username: Optional[str], password: Optional[str]) -> str:
    """Embed username and password in url, replacing any credentials already there.

    Returns url unchanged when there is no username.
    """
    if not username:
        return url
    parts = urlsplit(url)
    hostport = parts.netloc.rpartition("@")[2]
    userinfo = quote(username, safe="")
    if password is not None:
        userinfo += ":" + quote(password, safe="")
    return urlunsplit((parts.scheme, f"{userinfo}@{hostport}", parts.path, parts.query, parts.fragment))
