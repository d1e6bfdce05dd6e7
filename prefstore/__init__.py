"""prefstore - a small JSON file-backed preferences store."""

from .config import StoreOptions, load_options
from .flatten import flatten_object, unflatten_object
from .paths import resolve_default_dir
from .store import PreferenceStore, parse_data_file

__all__ = [
    "PreferenceStore",
    "StoreOptions",
    "flatten_object",
    "load_options",
    "parse_data_file",
    "resolve_default_dir",
    "unflatten_object",
]
