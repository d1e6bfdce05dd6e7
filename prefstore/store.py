"""JSON file-backed preferences store with dotted-key lookup."""

import copy
import json
import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Iterator, Optional

from .config import DEFAULT_FILE_NAME, StoreOptions
from .flatten import DEFAULT_SEPARATOR, flatten_object, unflatten_object
from .paths import DirResolver, resolve_default_dir

logger = logging.getLogger(__name__)

SaveErrorObserver = Callable[[Path, Exception], None]

# Marks a missing `value` argument; None is a storable value
_MISSING = object()


def parse_data_file(path: str | Path, defaults: Any = None) -> dict[str, Any]:
    """Read a JSON data file and merge it over ``defaults``.

    Top-level keys from the file win. Any read or parse failure returns a
    shallow copy of ``defaults`` instead (``{}`` if it is not a mapping).
    """
    base = dict(defaults) if isinstance(defaults, Mapping) else {}
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.debug("No data file at %s, using defaults", path)
        return base
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        logger.warning("Could not load %s: %s", path, e)
        return base
    if not isinstance(data, dict):
        logger.warning("Could not load %s: root is not an object", path)
        return base
    base.update(data)
    return base


def _freeze(obj: Any) -> Any:
    """Wrap mappings in read-only proxies and turn lists into tuples, recursively."""
    if isinstance(obj, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in obj.items()})
    if isinstance(obj, (list, tuple)):
        return tuple(_freeze(v) for v in obj)
    return obj


def _thaw(obj: Any) -> Any:
    """Deep-copy ``obj`` into plain dicts and lists (accepts frozen input)."""
    if isinstance(obj, Mapping):
        return {k: _thaw(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_thaw(v) for v in obj]
    return copy.deepcopy(obj)


def _check_key(key: Any) -> None:
    if not isinstance(key, str):
        raise TypeError(f"Expected `key` to be of type `str`, got {type(key).__name__}")
    if not key:
        raise ValueError("`key` must be a non-empty string")


class PreferenceStore:
    """Flat key-value preferences persisted to a single JSON file.

    Nested values are stored under dotted keys and every mutation rewrites
    the file synchronously.

    Usage:
        prefs = PreferenceStore(file_path="~/.myapp", defaults={"window": {"width": 800}})
        prefs.get("window.width")   # -> 800
        prefs.get("window")         # -> {"width": 800}
        prefs.set("window.width", 1024).delete("theme")

    I/O errors never reach the caller. Save failures are logged and passed
    to ``on_save_error(path, error)`` when one is given.
    """

    def __init__(self, file_path: str | Path | None = None,
                 file_name: str = DEFAULT_FILE_NAME,
                 defaults: Optional[Mapping[str, Any]] = None, *,
                 separator: str = DEFAULT_SEPARATOR,
                 dir_resolver: Optional[DirResolver] = None,
                 on_save_error: Optional[SaveErrorObserver] = None):
        if not isinstance(separator, str) or not separator:
            raise ValueError("separator must be a non-empty string")
        if not file_path:
            file_path = (dir_resolver or resolve_default_dir)()
        self._path = Path(file_path).expanduser() / f"{file_name or DEFAULT_FILE_NAME}.json"
        self._separator = separator
        self._defaults = _freeze(defaults or {})
        self._on_save_error = on_save_error
        self._lock = threading.RLock()

        flat_defaults = flatten_object(_thaw(defaults or {}), separator)
        loaded = parse_data_file(self._path, flat_defaults)
        self._entries: dict[str, Any] = flatten_object(loaded, separator)

    @classmethod
    def from_options(cls, options: StoreOptions, **kwargs: Any) -> "PreferenceStore":
        """Build a store from validated options (see ``load_options``)."""
        return cls(file_path=options.file_path, file_name=options.file_name,
                   defaults=options.defaults, separator=options.separator, **kwargs)

    # --- Read-only properties ---

    @property
    def defaults(self) -> Mapping[str, Any]:
        return self._defaults

    @property
    def path(self) -> Path:
        return self._path

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def size(self) -> int:
        return len(self._entries)

    @property
    def length(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return self.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self._path)!r}, size={self.size})"

    # --- Lookup ---

    def get(self, key: Optional[str] = None, default: Any = None) -> Any:
        """Return one value, a prefix group, or a copy of every entry.

        Without a key the whole store is returned. An exact key returns its
        value. Otherwise every key under ``key + separator`` is returned
        with that prefix stripped, or ``default`` if none exist.
        """
        with self._lock:
            if not key:
                return dict(self._entries)
            if key in self._entries:
                return self._entries[key]

            prefix = f"{key}{self._separator}"
            group = {k[len(prefix):]: v for k, v in self._entries.items()
                     if k.startswith(prefix)}
        return group if group else default

    def has(self, key: object) -> bool:
        return isinstance(key, str) and key in self._entries

    def entries(self) -> list[tuple[str, Any]]:
        with self._lock:
            return list(self._entries.items())

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._entries.keys())

    def values(self) -> list[Any]:
        with self._lock:
            return list(self._entries.values())

    def for_each(self, callback: Callable[[Any, str, int], Any]) -> "PreferenceStore":
        """Call ``callback(value, key, index)`` over a snapshot of the entries."""
        if callable(callback):
            for index, (key, value) in enumerate(self.entries()):
                callback(value, key, index)
        return self

    def as_nested(self) -> dict[str, Any]:
        """Return the current entries expanded back into nested dicts."""
        with self._lock:
            return unflatten_object(self._entries, self._separator)

    # --- Mutation ---

    def set(self, key: str, value: Any = _MISSING) -> "PreferenceStore":
        _check_key(key)
        if value is _MISSING:
            raise TypeError("Use the `.delete()` method to clear values")
        with self._lock:
            self._entries[key] = value
            return self._save()

    def update(self, data: Mapping[str, Any]) -> "PreferenceStore":
        """Merge multiple keys and save once."""
        for key in data:
            _check_key(key)
        with self._lock:
            self._entries.update(data)
            return self._save()

    def delete(self, key: str) -> "PreferenceStore":
        with self._lock:
            self._entries.pop(key, None)
            return self._save()

    def clear(self) -> "PreferenceStore":
        with self._lock:
            self._entries = {}
            return self._save()

    def _save(self) -> "PreferenceStore":
        """Flatten the entries and overwrite the backing file."""
        with self._lock:
            self._entries = flatten_object(self._entries, self._separator)
            try:
                # Serialize first so a bad value never truncates the file
                payload = json.dumps(self._entries, indent=2, ensure_ascii=False)
                self._path.parent.mkdir(parents=True, exist_ok=True)
                self._path.write_text(payload, encoding="utf-8")
            except (OSError, TypeError, ValueError) as e:
                logger.warning("Could not save %s: %s", self._path, e)
                if self._on_save_error is not None:
                    self._on_save_error(self._path, e)
        return self
