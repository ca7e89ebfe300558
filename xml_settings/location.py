"""Where a settings document lives on disk."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]

DEFAULT_EXTENSION = ".xml"


def default_home() -> Path:
    return Path.home() / ".xml_settings"


def _app_dir() -> Path:
    # Directory of the running script; falls back to cwd for interactive use.
    if sys.argv and sys.argv[0]:
        return Path(sys.argv[0]).resolve().parent
    return Path.cwd()


@dataclass(frozen=True)
class StoreLocation:
    """Directory + file name of a settings document.

    Only the final component of ``name`` is used, so ``"cfg/prefs"`` and
    ``"prefs"`` name the same file. The extension is appended to the name.
    """

    directory: Path = field(default_factory=default_home)
    name: str = "settings"
    extension: str = DEFAULT_EXTENSION

    def __post_init__(self) -> None:
        object.__setattr__(self, "directory", Path(self.directory).expanduser())
        base_name = Path(str(self.name)).name
        if not base_name:
            raise ValueError(f"Settings file name is empty: {self.name!r}")
        object.__setattr__(self, "name", base_name)

    def path(self) -> Path:
        return self.directory / (self.name + self.extension)

    @classmethod
    def app_relative(
        cls,
        directory: PathLike,
        name: str,
        base: Optional[PathLike] = None,
    ) -> "StoreLocation":
        """Place the document in a folder next to the application.

        Only the last component of ``directory`` is kept and joined onto
        ``base`` (default: the running script's directory).
        """
        root = Path(base) if base is not None else _app_dir()
        return cls(directory=root / Path(directory).name, name=name)
