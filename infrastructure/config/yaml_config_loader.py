"""
Service configuration from YAML files.

``config/services/shared.yml`` is required; ``config/services/<name>.yml`` is
optional and merged over it. ``${env.NAME}`` placeholders are expanded from
the environment before the YAML is parsed.
"""
from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from domain.exceptions import ConfigError

_PLACEHOLDER = re.compile(r"\$\{\s*env\.([A-Za-z_][A-Za-z0-9_]*)\s*(?:\|\s*([^}]*))?\}")


class YamlConfigLoader:
    SHARED_NAME = "shared"

    def __init__(self, config_dir: Path, environ: Optional[Mapping[str, str]] = None):
        self.config_dir = Path(config_dir)
        self._environ = environ

    def load(self, service_name: str) -> Dict[str, Any]:
        shared_path = self.config_dir / f"{self.SHARED_NAME}.yml"
        if not shared_path.exists():
            raise ConfigError(f"Couldn't find the shared config file '{shared_path}'.")

        config = self.load_file(shared_path)

        service_path = self.config_dir / f"{service_name}.yml"
        if service_path.exists():
            config = {**config, **self.load_file(service_path)}
        return config

    def load_file(self, path: Path) -> Dict[str, Any]:
        text = self.render(path.read_text(encoding="utf-8")).strip()
        if not text:
            return {}

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in config file '{path}': {exc}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a mapping: {path}")
        return data

    def render(self, text: str) -> str:
        environ = self._environ if self._environ is not None else os.environ

        def replace(match: "re.Match[str]") -> str:
            name, default = match.group(1), match.group(2)
            value = environ.get(name)
            if value is None:
                if default is None:
                    raise ConfigError(f"Environment variable not set: {name}")
                return default.strip()
            return value

        return _PLACEHOLDER.sub(replace, text)
