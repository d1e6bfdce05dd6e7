"""Default directory resolution for the backing file.

Each platform gets its own resolver so stores can be pointed at a known
location in tests (or by applications) without touching the environment.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Mapping, Optional

DirResolver = Callable[[], Path]

POSIX_DATA_DIR = Path("/var/local")


def windows_data_dir(environ: Mapping[str, str], home: Path) -> Path:
    appdata = environ.get("APPDATA")
    if appdata:
        return Path(appdata)
    return home / "AppData" / "Roaming"


def macos_data_dir(environ: Mapping[str, str], home: Path) -> Path:
    return home / "Library" / "Preferences"


def posix_data_dir(environ: Mapping[str, str], home: Path) -> Path:
    return POSIX_DATA_DIR


_RESOLVERS = {
    "win32": windows_data_dir,
    "darwin": macos_data_dir,
}


def resolve_default_dir(platform: Optional[str] = None,
                        environ: Optional[Mapping[str, str]] = None,
                        home: Optional[Path] = None) -> Path:
    """Return the per-user preferences directory for ``platform``.

    Arguments default to the running interpreter's ``sys.platform``,
    ``os.environ`` and ``Path.home()``.
    """
    platform = platform or sys.platform
    environ = os.environ if environ is None else environ
    home = Path.home() if home is None else Path(home)
    resolver = _RESOLVERS.get(platform, posix_data_dir)
    return resolver(environ, home)
