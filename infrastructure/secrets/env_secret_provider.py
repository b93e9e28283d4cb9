from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import dotenv_values


class EnvSecretProvider:
    """
    Secrets from environment variables and an optional ``.env`` file.

    With a ``prefix`` only the matching variables are returned, with the
    prefix stripped: prefix ``SERVICES_MAILER_`` turns
    ``SERVICES_MAILER_API_KEY`` into ``API_KEY``.
    """

    def __init__(self, prefix: str = "", env_path: Optional[Union[str, Path]] = None):
        self.prefix = prefix.upper()

        # values already in the environment win over the .env file
        values: Dict[str, Any] = {}
        if env_path is not None and Path(env_path).exists():
            values.update(dotenv_values(env_path))
        values.update(os.environ)
        self._env_vars = values

    def get(self) -> Dict[str, Any]:
        if not self.prefix:
            return dict(self._env_vars)
        return {
            key[len(self.prefix):]: value
            for key, value in self._env_vars.items()
            if key.upper().startswith(self.prefix)
        }
