# ./settings/registry_settings.py

from typing import Optional
from pydantic import Field
from pydantic_settings import SettingsConfigDict
from memtier.settings.base_settings import BaseConfig


class RegistrySettings(BaseConfig):
    """
    Settings for the configuration registry.

    Attributes:
        config_file (Optional[str]): JSON document loaded by `load_from_settings`, if any.
    """

    model_config = SettingsConfigDict(env_prefix="MEMTIER_")

    config_file: Optional[str] = Field(None, description="Path of the JSON configuration file (MEMTIER_CONFIG_FILE).")
