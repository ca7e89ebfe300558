from __future__ import annotations

import logging
from typing import Any, Optional, Union

from . import values
from .fs import FileSystem
from .location import PathLike, StoreLocation
from .store import ReadResult, SettingsStore
from .values import TypeSpec

logger = logging.getLogger(__name__)

ROOT_ELEMENT = "Settings"


class TargetedSettingsStore(SettingsStore):
    """Settings store whose reads and writes go to a targeted section.

    Select a section with :meth:`target_section` (or
    ``create_section(name, make_current=True)``), then use
    ``write(prop, value)`` / ``read(prop, type)``. Without a target those
    calls do nothing and report ``False`` / ``found=False``.

    The cursor holds the section *name*; every access looks the section up
    again, so destroying the targeted section simply unsets the cursor.

    The root element is always ``<Settings>``, and a successful
    :meth:`serialize` empties the store (sections and cursor).

    Not thread-safe.
    """

    def __init__(
        self,
        location: Union[StoreLocation, PathLike, None] = None,
        name: Optional[str] = None,
        *,
        fs: Optional[FileSystem] = None,
        clear_after_serialize: bool = True,
    ) -> None:
        super().__init__(
            location,
            name,
            root_name=ROOT_ELEMENT,
            fs=fs,
            clear_after_serialize=clear_after_serialize,
        )
        self._current: Optional[str] = None

    # Cursor --------------------------------------------------------------
    @property
    def current_section(self) -> Optional[str]:
        return self._current

    @property
    def has_target(self) -> bool:
        return self._current is not None

    def target_section(self, name: str) -> bool:
        """Point the cursor at ``name``. On failure the cursor is cleared."""
        if name in self.sections:
            self._current = name
            logger.debug("Targeted section %r", name)
            return True
        self._current = None
        logger.debug("Section %r not found; cursor cleared", name)
        return False

    def create_section(self, name: str, make_current: bool = False) -> bool:
        created = super().create_section(name)
        if make_current:
            self.target_section(name)
        return created

    def destroy_section(self, name: str) -> bool:
        existed = super().destroy_section(name)
        if existed and self._current == name:
            self._current = None
        return existed

    def clear(self) -> None:
        super().clear()
        self._current = None

    # Typed access against the targeted section ---------------------------
    def write(self, prop: str, value: Any, value_type: Optional[TypeSpec] = None) -> bool:  # type: ignore[override]
        """Write ``prop`` in the targeted section. Returns False if nothing is targeted.

        The value is checked first, so unsupported types raise even without a
        target.
        """
        values.encode(value, value_type)
        if self._current is None:
            return False
        super().write(self._current, prop, value, value_type)
        return True

    def read(self, prop: str, value_type: TypeSpec) -> ReadResult:  # type: ignore[override]
        if self._current is None:
            return ReadResult(values.default_for(value_type), False)
        return super().read(self._current, prop, value_type)

    # Section-qualified access, same contract as SettingsStore.write/read.
    def write_to(self, section: str, prop: str, value: Any, value_type: Optional[TypeSpec] = None) -> None:
        super().write(section, prop, value, value_type)

    def read_from(self, section: str, prop: str, value_type: TypeSpec) -> ReadResult:
        return super().read(section, prop, value_type)
