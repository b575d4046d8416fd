# ./config/registry.py

import json
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import BaseModel, ValidationError

from memtier.settings.registry_settings import RegistrySettings
from memtier.utils.logger import setup_logger

logger = setup_logger(__name__)

Notifier = Callable[[str, BaseModel], None]


class ConfigError(Exception):
    """
    Raised for registry misuse and for rejected configuration loads.

    Attributes:
        path (Optional[str]): The configuration path the error relates to, if any.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


@dataclass
class _Entry:
    path: str
    description: str
    instance: BaseModel
    factory: Callable[[], BaseModel]


def _format_validation_error(path: str, error: ValidationError) -> str:
    details = "; ".join(
        f"{'.'.join(str(part) for part in e['loc']) or '<root>'}: {e['msg']}"
        for e in error.errors()
    )
    return f"invalid configuration for {path}: {details}"


class ConfigRegistry:
    """
    Holds the configurable parts of the process, keyed by dotted path.

    Registered instances are live: each load validates the document over the
    registered defaults and then overwrites the live instances in place, so
    references handed out earlier observe the new values. Readers that need a
    consistent view across a reload should take a `snapshot`.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._entries: Dict[str, _Entry] = {}
        self._notifiers: List[Notifier] = []

    def register(self, path: str, description: str, instance: BaseModel, factory: Callable[[], BaseModel]) -> None:
        """
        Register a configurable instance under path.

        Args:
            path (str): Unique dotted configuration path, e.g. "policy.memtier".
            description (str): Human-readable description.
            instance (BaseModel): The live instance future loads populate.
            factory (Callable[[], BaseModel]): Returns a new instance holding the defaults.

        Raises:
            ConfigError: If path is already registered or instance is not a pydantic model.
        """
        if not isinstance(instance, BaseModel):
            raise ConfigError(f"cannot register {path}: {type(instance).__name__} is not a pydantic model", path)
        with self._lock:
            if path in self._entries:
                raise ConfigError(f"configuration path {path} already registered", path)
            self._entries[path] = _Entry(path, description, instance, factory)
        logger.info(f"Registered configuration {path}: {description}")

    def add_notifier(self, notifier: Notifier) -> None:
        """
        Add a callback invoked as notifier(path, instance) after every applied load or reset.

        A failing notifier is logged and does not stop the others; the configuration stays applied.
        """
        with self._lock:
            self._notifiers.append(notifier)

    def describe(self) -> Dict[str, str]:
        with self._lock:
            return {path: entry.description for path, entry in self._entries.items()}

    def get(self, path: str) -> BaseModel:
        """Return the live instance registered under path."""
        with self._lock:
            return self._entry(path).instance

    def snapshot(self, path: str) -> BaseModel:
        """Return a deep copy of the instance registered under path."""
        with self._lock:
            return self._entry(path).instance.model_copy(deep=True)

    def _entry(self, path: str) -> _Entry:
        try:
            return self._entries[path]
        except KeyError:
            raise ConfigError(f"configuration path {path} not registered", path) from None

    @staticmethod
    def _section(document: Mapping[str, Any], path: str) -> Mapping[str, Any]:
        section: Any = document
        walked: List[str] = []
        for key in path.split("."):
            if section is None or key not in section:
                return {}
            section = section[key]
            walked.append(key)
            if section is not None and not isinstance(section, Mapping):
                raise ConfigError(
                    f"invalid configuration for {path}: {'.'.join(walked)} must be an object, "
                    f"got {type(section).__name__}",
                    path,
                )
        return section or {}

    @staticmethod
    def _build(entry: _Entry, section: Mapping[str, Any]) -> BaseModel:
        defaults = entry.factory()
        model_type = type(defaults)
        try:
            parsed = model_type.model_validate(section)
        except ValidationError as e:
            raise ConfigError(_format_validation_error(entry.path, e), entry.path) from e

        known = set()
        for name, field in model_type.model_fields.items():
            known.update((name, field.alias or name))
        unknown = sorted(str(key) for key in section if key not in known)
        if unknown:
            logger.warning(f"Ignoring unknown keys for {entry.path}: {unknown}")

        return defaults.model_copy(update={name: getattr(parsed, name) for name in parsed.model_fields_set})

    def _apply(self, entry: _Entry, updated: BaseModel) -> None:
        for name in type(updated).model_fields:
            setattr(entry.instance, name, getattr(updated, name))

    def _notify(self, applied: List[_Entry]) -> None:
        for entry in applied:
            for notifier in list(self._notifiers):
                try:
                    notifier(entry.path, entry.instance)
                except Exception:
                    logger.exception(f"Configuration notifier {notifier!r} failed for {entry.path}")

    def load(self, document: Mapping[str, Any]) -> None:
        """
        Load a configuration document into all registered instances.

        Every registered section is validated before any live instance is touched;
        if one fails, the whole load is rejected and nothing changes.

        Args:
            document (Mapping[str, Any]): Nested configuration, sections located by dotted path.

        Raises:
            ConfigError: If the document or any of its sections is invalid.
        """
        if not isinstance(document, Mapping):
            raise ConfigError(f"configuration must be an object, got {type(document).__name__}")

        with self._lock:
            entries = list(self._entries.values())
            try:
                updates = [(entry, self._build(entry, self._section(document, entry.path))) for entry in entries]
            except ConfigError as e:
                logger.error(f"Rejected configuration: {e}")
                raise
            for entry, updated in updates:
                self._apply(entry, updated)
            self._notify(entries)
        logger.info(f"Loaded configuration for {len(entries)} path(s)")

    def load_json(self, text: str) -> None:
        """Parse a JSON document and load it."""
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"invalid configuration JSON: {e}") from e
        self.load(document)

    def load_file(self, filename: str) -> None:
        """Read a JSON document from filename and load it."""
        logger.info(f"Loading configuration from {filename}")
        try:
            with open(filename, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"cannot read configuration {filename}: {e}") from e
        self.load_json(text)

    def reset(self) -> None:
        """Restore every registered instance to its defaults."""
        with self._lock:
            entries = list(self._entries.values())
            for entry in entries:
                self._apply(entry, entry.factory())
            self._notify(entries)
        logger.info("Reset configuration to defaults")


# Process-wide registry
registry = ConfigRegistry()


def register(path: str, description: str, instance: BaseModel, factory: Callable[[], BaseModel]) -> None:
    """Register instance with the process-wide registry."""
    registry.register(path, description, instance, factory)


def load_from_settings(settings: Optional[RegistrySettings] = None, target: Optional[ConfigRegistry] = None) -> bool:
    """
    Load the configuration file named by RegistrySettings.config_file, if one is set.

    Returns:
        bool: True if a file was loaded.
    """
    settings = settings or RegistrySettings()
    if not settings.config_file:
        logger.debug("No configuration file set, keeping defaults")
        return False
    (target or registry).load_file(settings.config_file)
    return True
