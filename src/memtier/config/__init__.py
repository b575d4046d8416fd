from .registry import ConfigError, ConfigRegistry, load_from_settings, register, registry

__all__ = ["ConfigError", "ConfigRegistry", "load_from_settings", "register", "registry"]
