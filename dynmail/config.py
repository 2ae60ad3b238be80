"""
Config - environment-backed configuration source for built-in transports.

Transports never read ``os.environ`` directly; they receive an
``EnvConfig`` (or build the default one) and ask it for their fallback
values. Precedence, highest first:

1. Explicit ``values`` mapping
2. Process environment
3. ``.env`` file (loaded with python-dotenv)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values


class EnvConfig:
    """
    Read-only view over configuration variables.

    Usage::

        config = EnvConfig(env_file=".env")
        provider = ResendProvider(config=config)

        # Tests / explicit wiring
        config = EnvConfig({"RESEND_API_KEY": "re_123"}, environ={})
    """

    def __init__(
        self,
        values: Optional[Mapping[str, str]] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
        env_file: Optional[Union[str, Path]] = None,
    ):
        data: Dict[str, str] = {}

        if env_file is not None and Path(env_file).exists():
            for key, value in dotenv_values(env_file).items():
                if value is not None:
                    data[key] = value

        data.update(os.environ if environ is None else environ)

        if values:
            data.update(values)

        self._data = data

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return a non-empty value for ``key`` or ``default``."""
        value = self._data.get(key)
        if value is None or value == "":
            return default
        return value

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __repr__(self) -> str:
        return f"EnvConfig(keys={len(self._data)})"
