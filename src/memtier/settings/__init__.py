from .base_settings import BaseConfig
from .logging_settings import LoggingSettings
from .registry_settings import RegistrySettings

__all__ = ["BaseConfig", "LoggingSettings", "RegistrySettings"]
