from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from application.callable import Callable
from application.ports.logger import LoggerPort
from domain.exceptions import ConfigError
from infrastructure.config.settings import Settings
from infrastructure.config.yaml_config_loader import YamlConfigLoader
from infrastructure.logging.console_logger import ConsoleLogger
from infrastructure.logging.log_setup import add_file_sink
from infrastructure.logging.loguru_logger import LoguruLogger
from infrastructure.secrets.env_secret_provider import EnvSecretProvider

# loguru handler ids per log file, so re-instantiating a service does not duplicate sinks
_FILE_SINKS: Dict[Path, int] = {}


class Service(Callable):
    """
    Base class for wrappers around third party services.

    Provides:
      - configuration from ``config/services/shared.yml`` merged with
        ``config/services/<service_name>.yml`` (``self.config``)
      - logging to ``log/services/<service_name>.log``, or to stdout when
        ``SERVICE_LOGGER_STDOUT`` is set (``self.logger``)
      - call style invocation: ``PdfGeneration.call(...)``

    Example::

        class PdfGeneration(Service):
            def __init__(self):
                super().__init__("pdf_generation")

            def __call__(self, document):
                self.logger.info("pdf.render", pages=len(document))
                ...
    """

    def __init__(self, service_name: Optional[str] = None, settings: Optional[Settings] = None):
        if type(self) is Service:
            raise NotImplementedError("Service is abstract; subclass it")
        if not service_name:
            raise ConfigError("Please provide a service name!")

        self.service_name = service_name
        self.settings = settings or Settings.from_env()
        self.logger: LoggerPort = self._setup_logger()
        self.config: Dict[str, Any] = self._setup_configuration()

    def _setup_logger(self) -> LoggerPort:
        if self.settings.logger_stdout:
            return ConsoleLogger(prefix=self.service_name, level=self.settings.log_level)

        log_file = (self.settings.services_log_dir / f"{self.service_name}.log").resolve()
        sink_id = f"service:{log_file}"
        if log_file not in _FILE_SINKS:
            _FILE_SINKS[log_file] = add_file_sink(log_file, sink_id=sink_id, level=self.settings.log_level)
        return LoguruLogger(sink_id=sink_id).bind(service=self.service_name)

    def _setup_configuration(self) -> Dict[str, Any]:
        return YamlConfigLoader(self.settings.services_config_dir).load(self.service_name)

    @property
    def log_file(self) -> Path:
        return self.settings.services_log_dir / f"{self.service_name}.log"

    def secret(self, key: str) -> Any:
        """Look up ``SERVICES_<SERVICE_NAME>_<KEY>`` in the environment or the root ``.env``."""
        prefix = f"SERVICES_{self.service_name}_".upper()
        secrets = EnvSecretProvider(prefix=prefix, env_path=self.settings.root / ".env").get()

        if not secrets:
            raise ConfigError(f"No secrets entry found for 'services.{self.service_name}'")
        value = secrets.get(key.upper())
        if value is None:
            raise ConfigError(f"No secrets entry found for 'services.{self.service_name}.{key}'")
        return value
