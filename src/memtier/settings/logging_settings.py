# ./settings/logging_settings.py

from pydantic import Field
from pydantic_settings import SettingsConfigDict
from memtier.settings.base_settings import BaseConfig


class LoggingSettings(BaseConfig):
    """
    Configuration settings for logging.

    Attributes:
        level (str): The logging level (e.g., DEBUG, INFO, WARNING, ERROR, CRITICAL).
        format (str): The format string for log messages.
        datefmt (str): The date format string for log messages.
    """

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field("INFO", description="Logging level, read from LOG_LEVEL.")
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format string, read from LOG_FORMAT.",
    )
    datefmt: str = Field(
        "%Y-%m-%d %H:%M:%S",
        description="Logging date format string, read from LOG_DATEFMT.",
    )
