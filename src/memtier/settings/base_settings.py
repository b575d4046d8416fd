# ./settings/base_settings.py

from pydantic_settings import BaseSettings, SettingsConfigDict

class BaseConfig(BaseSettings):
    """
    Base configuration class that sets the environment file for all configurations.

    Attributes:
        model_config: Settings configuration specifying the `.env` file and ignoring unknown variables.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
