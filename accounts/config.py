"""
Accounts API settings read from the environment.

Required environment variables:
  ACCOUNTS_ADDRESS   – Base URL of the accounts API (e.g. http://localhost:8080)
  ORGANISATION_ID    – Organisation UUID stamped on created accounts

Optional:
  ACCOUNTS_TIMEOUT   – Request timeout in seconds (default: 30)

A ``.env`` file is read first; variables already set in the environment win.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from accounts.errors import ConfigError

ACCOUNTS_ADDRESS_KEY = "ACCOUNTS_ADDRESS"
ORGANISATION_ID_KEY = "ORGANISATION_ID"
ACCOUNTS_TIMEOUT_KEY = "ACCOUNTS_TIMEOUT"

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class AccountsConfig:
    base_url: str
    organisation_id: str
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "AccountsConfig":
        """Build the config from the environment, loading ``env_file`` (or ./.env) first."""
        load_dotenv(env_file, override=False)

        base_url = os.getenv(ACCOUNTS_ADDRESS_KEY, "").strip()
        organisation_id = os.getenv(ORGANISATION_ID_KEY, "").strip()

        missing = [
            name
            for name, val in [
                (ACCOUNTS_ADDRESS_KEY, base_url),
                (ORGANISATION_ID_KEY, organisation_id),
            ]
            if not val
        ]
        if missing:
            raise ConfigError(f"missing environment variables: {', '.join(missing)}")

        raw_timeout = os.getenv(ACCOUNTS_TIMEOUT_KEY, "").strip()
        timeout = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ConfigError(f"{ACCOUNTS_TIMEOUT_KEY} is not a number: {raw_timeout!r}") from exc
            if timeout <= 0:
                raise ConfigError(f"{ACCOUNTS_TIMEOUT_KEY} must be positive, got {raw_timeout!r}")

        return cls(base_url=base_url.rstrip("/"), organisation_id=organisation_id, timeout=timeout)
