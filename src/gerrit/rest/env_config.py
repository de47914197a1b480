import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import urlsplit

from gerrit.rest import DEFAULT_ENV_CONFIG_FILE_PATH
from gerrit.rest.credentials_parser import KEYRING_SCHEME
from gerrit.rest.errors import ConfigurationError


@dataclass
class Environment:
    """A named Gerrit instance and where to find its credentials."""

    name: str
    url: str
    credentials: Optional[str] = None

    @property
    def hostname(self) -> str:
        return urlsplit(self.url).hostname or ""

    @classmethod
    def from_dict(cls, name: str, data: Dict[str, Any]) -> "Environment":
        if "url" not in data:
            raise ConfigurationError(f"Environment {name!r} has no url")
        credentials = data.get("credentials")
        if credentials and not credentials.startswith(KEYRING_SCHEME):
            credentials = str(Path(credentials).expanduser())
        return cls(name=name, url=data["url"], credentials=credentials)


@dataclass
class EnvConfig:
    environments: Dict[str, Environment] = field(default_factory=dict)
    default_environment: Optional[str] = None


def load_env_config(path: Union[str, os.PathLike] = DEFAULT_ENV_CONFIG_FILE_PATH) -> EnvConfig:
    """Load the environments file, or an empty config if there is none.

    Expected layout::

        {
          "environments": {
            "review": {"url": "https://review.example.com/", "credentials": "keyring://review"},
            "local": {"url": "http://localhost:8080/", "credentials": "~/gerrit-admin.json"}
          },
          "default_environment": "review"
        }
    """
    expanded = Path(path).expanduser()
    if not expanded.is_file():
        return EnvConfig()

    data = json.loads(expanded.read_text())
    return EnvConfig(
        environments={name: Environment.from_dict(name, env) for name, env in data.get("environments", {}).items()},
        default_environment=data.get("default_environment"),
    )


def _match_host(config: EnvConfig, hostname: str) -> Optional[Environment]:
    envs = list(config.environments.values())
    exact = [env for env in envs if env.hostname == hostname]
    if exact:
        return exact[0]
    suffix = [env for env in envs if env.hostname and hostname.endswith("." + env.hostname)]
    return suffix[0] if suffix else None


def resolve_environment(config: EnvConfig, url: Optional[str] = None, env_name: Optional[str] = None) -> Environment:
    """Pick the environment for a command line invocation.

    An explicit env_name wins. A URL selects the environment with the same host
    or a parent domain of it, and is otherwise used as-is without credentials.
    Without either the default environment is used.
    """
    if env_name:
        if env_name not in config.environments:
            raise ValueError(f"Unknown environment: {env_name}")
        return config.environments[env_name]

    if url:
        return _match_host(config, urlsplit(url).hostname or "") or Environment(name="default", url=url)

    if config.default_environment in config.environments:
        return config.environments[config.default_environment]

    raise ValueError("No Gerrit URL given and no default environment configured")
