from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Union

from . import values, xml_codec
from .fs import FileSystem, LocalFileSystem
from .location import PathLike, StoreLocation
from .names import validate_name
from .values import TypeSpec

logger = logging.getLogger(__name__)


class ReadResult(NamedTuple):
    """Outcome of a typed read: the value (or the type's default) and whether it was found."""

    value: Any
    found: bool


def _make_location(location: Union[StoreLocation, PathLike, None], name: Optional[str]) -> StoreLocation:
    if isinstance(location, StoreLocation):
        if name is not None:
            raise TypeError("name must not be given together with a StoreLocation")
        return location
    kwargs: Dict[str, Any] = {}
    if location is not None:
        kwargs["directory"] = Path(location)
    if name is not None:
        kwargs["name"] = name
    return StoreLocation(**kwargs)


class SettingsStore:
    """Sectioned key-value settings persisted as an XML document.

    Values are kept as text in ``section -> property -> text`` maps and are
    converted on ``write``/``read`` (see :mod:`xml_settings.values`).
    ``serialize`` writes a full snapshot; ``deserialize`` replaces the whole
    in-memory mapping with the document on disk.

    Not thread-safe: callers sharing an instance must serialize access.

    Usage::

        store = SettingsStore("~/.myapp", "prefs", root_name="MyApp")
        store.write("Display", "Width", 100)
        store.serialize()

        other = SettingsStore("~/.myapp", "prefs", root_name="MyApp")
        other.deserialize()
        other.read("Display", "Width", int)   # ReadResult(value=100, found=True)
    """

    def __init__(
        self,
        location: Union[StoreLocation, PathLike, None] = None,
        name: Optional[str] = None,
        root_name: str = "Settings",
        *,
        fs: Optional[FileSystem] = None,
        clear_after_serialize: bool = False,
    ) -> None:
        self.location = _make_location(location, name)
        self.root_name = validate_name(root_name, "root element name")
        self.fs: FileSystem = fs if fs is not None else LocalFileSystem()
        self.clear_after_serialize = clear_after_serialize
        self.sections: Dict[str, Dict[str, str]] = {}

    def path(self) -> Path:
        return self.location.path()

    # Queries -------------------------------------------------------------
    def exists(self, section: str, prop: str) -> bool:
        props = self.sections.get(section)
        return props is not None and prop in props

    def __contains__(self, section: object) -> bool:
        return section in self.sections

    def __len__(self) -> int:
        return len(self.sections)

    def __iter__(self) -> Iterator[str]:
        return iter(self.sections)

    def section_names(self) -> List[str]:
        return list(self.sections)

    def properties(self, section: str) -> Dict[str, str]:
        """Copy of the raw stored text of ``section`` (empty if absent)."""
        return dict(self.sections.get(section, {}))

    # Typed access --------------------------------------------------------
    def write(self, section: str, prop: str, value: Any, value_type: Optional[TypeSpec] = None) -> None:
        """Store ``value`` under ``section``/``prop``, replacing any previous value.

        The section is created if needed. Names are validated and the value
        is encoded before anything is touched, so a failing write leaves the
        store unchanged.
        """
        validate_name(section, "section name")
        validate_name(prop, "property name")
        text = values.encode(value, value_type)

        props = self.sections.setdefault(section, {})
        props.pop(prop, None)
        props[prop] = text

    def read(self, section: str, prop: str, value_type: TypeSpec) -> ReadResult:
        """Read ``section``/``prop`` as ``value_type``.

        Absent pairs give ``ReadResult(default, False)``. A present value that
        cannot be parsed raises ConversionError.
        """
        tag = values.resolve_type(value_type)
        props = self.sections.get(section)
        if props is None or prop not in props:
            return ReadResult(values.default_for(tag), False)
        return ReadResult(values.decode(props[prop], tag), True)

    # Sections ------------------------------------------------------------
    def create_section(self, name: str, make_current: bool = False) -> bool:
        """Add an empty section. Returns True if it was created, False if it already existed.

        ``make_current`` only has an effect on stores with a targeting cursor.
        """
        validate_name(name, "section name")
        if name in self.sections:
            return False
        self.sections[name] = {}
        logger.debug("Created section %r", name)
        return True

    def destroy_section(self, name: str) -> bool:
        """Remove a section and its properties. Returns True if it existed."""
        if name not in self.sections:
            return False
        del self.sections[name]
        logger.debug("Destroyed section %r", name)
        return True

    def clear(self) -> None:
        self.sections.clear()

    # Persistence ---------------------------------------------------------
    def serialize(self) -> Path:
        """Write all sections to disk and return the file path."""
        path = self.path()
        payload = xml_codec.render(self.root_name, self.sections)
        self.fs.ensure_directory(path.parent)
        self.fs.write_file(path, payload)
        logger.info("Settings saved to %s (%d sections)", path, len(self.sections))
        if self.clear_after_serialize:
            self.clear()
        return path

    def deserialize(self) -> bool:
        """Replace the in-memory sections with the document on disk.

        Returns False (and changes nothing) when there is no file. A document
        with the wrong root element raises StructuralError, also without
        touching the current sections.
        """
        path = self.path()
        data = self.fs.read_file(path)
        if data is None:
            logger.info("No settings file at %s", path)
            return False

        loaded = xml_codec.parse_document(data, self.root_name)
        self.clear()
        self.sections.update(loaded)
        logger.info("Settings loaded from %s (%d sections)", path, len(self.sections))
        return True
