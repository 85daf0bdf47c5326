"""Nav entry language: decoding and encoding.

A folder's index document lists its children under `nav:` using five forms:

    - file.md                 file, unnamed
    - Name: file.md           file, named
    - folder/                 folder (its own index.md holds its nav)
    - Name: !index page.md    folder with a non-default index document
    - Name: folder/*          include every document directly in folder/
    - Name:                   category, no index page of its own
        - file.md
        - folder/

Decoding works on generic YAML values (str, dict, list, Tagged) so the codec
never touches files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Union

from ..errors import DecodeError
from .paths import DOC_SUFFIX, INDEX_FILENAME

logger = logging.getLogger(__name__)

INDEX_TAG = "index"
FOLDER_SUFFIX = "/"
INCLUDE_SUFFIX = "/*"


@dataclass(frozen=True)
class Tagged:
    """A YAML value carrying an explicit `!tag`."""

    tag: str
    value: Any


@dataclass(frozen=True)
class FileEntry:
    path: str
    name: str | None = None


@dataclass(frozen=True)
class FolderEntry:
    path: str  # without the trailing slash
    name: str | None = None


@dataclass(frozen=True)
class TaggedIndexEntry:
    path: str  # the index document itself
    name: str | None = None


@dataclass(frozen=True)
class IncludeEntry:
    name: str
    path: str  # without the trailing /*


@dataclass(frozen=True)
class CategoryEntry:
    name: str
    entries: tuple[NavEntry, ...]


NavEntry = Union[FileEntry, FolderEntry, TaggedIndexEntry, IncludeEntry, CategoryEntry]


def _reject_self_reference(path: str, value: Any) -> None:
    if path == INDEX_FILENAME:
        raise DecodeError(f"cannot reference {INDEX_FILENAME} directly", value=value)


def _decode_path(name: str | None, path: str) -> NavEntry:
    _reject_self_reference(path, path)

    if path.endswith(INCLUDE_SUFFIX):
        if name is None:
            raise DecodeError(f"include {path} must specify a name", value=path)
        directory = path[: -len(INCLUDE_SUFFIX)]
        _reject_self_reference(directory, path)
        return IncludeEntry(name=name, path=directory)

    if path.endswith(DOC_SUFFIX):
        return FileEntry(path=path, name=name)

    if path.endswith(FOLDER_SUFFIX):
        return FolderEntry(path=path[: -len(FOLDER_SUFFIX)], name=name)

    if name is None:
        raise DecodeError(f"{path} must be a {DOC_SUFFIX} file or a folder/", value=path)
    raise DecodeError(f"{path} must be a {DOC_SUFFIX} file, a folder/, or an include/*", value=path)


def _decode_tagged(name: str | None, tagged: Tagged) -> NavEntry:
    if tagged.tag != INDEX_TAG:
        raise DecodeError(f"unknown tag: !{tagged.tag}", value=tagged)
    path = tagged.value
    if not isinstance(path, str):
        raise DecodeError("!index tag takes a string path (put name before the tag?)", value=tagged)
    if not path.endswith(DOC_SUFFIX):
        raise DecodeError(f"!index tag {path!r} must be a {DOC_SUFFIX} file", value=tagged)
    _reject_self_reference(path, tagged)

    # `!index folder/index.md` is just `folder/`; fix mode rewrites it that way
    folder_index = "/" + INDEX_FILENAME
    if path.endswith(folder_index):
        return FolderEntry(path=path[: -len(folder_index)], name=name)
    return TaggedIndexEntry(path=path, name=name)


def decode(value: Any) -> NavEntry:
    """Decode one nav entry from its YAML value."""
    logger.debug("decode value=%r", value)

    if isinstance(value, Tagged):
        return _decode_tagged(None, value)

    if isinstance(value, str):
        return _decode_path(None, value)

    if isinstance(value, dict) and len(value) == 1:
        ((name, inner),) = value.items()
        if not isinstance(name, str):
            raise DecodeError(f"nav entry name must be a string: {name!r}", value=value)

        if isinstance(inner, Tagged):
            return _decode_tagged(name, inner)
        if isinstance(inner, str):
            return _decode_path(name, inner)
        if isinstance(inner, list):
            return CategoryEntry(name=name, entries=tuple(decode(item) for item in inner))
        raise DecodeError(f"nav entry {name!r} must map to a path or a sequence", value=value)

    raise DecodeError(f"invalid nav item: {value!r}", value=value)


def decode_all(values: Iterable[Any]) -> list[NavEntry]:
    return [decode(value) for value in values]


def encode(entry: NavEntry) -> Any:
    """Encode a nav entry back into the YAML value it decodes from."""
    if isinstance(entry, FileEntry):
        return _named(entry.name, entry.path)
    if isinstance(entry, FolderEntry):
        return _named(entry.name, entry.path + FOLDER_SUFFIX)
    if isinstance(entry, TaggedIndexEntry):
        return _named(entry.name, Tagged(INDEX_TAG, entry.path))
    if isinstance(entry, IncludeEntry):
        return {entry.name: entry.path + INCLUDE_SUFFIX}
    if isinstance(entry, CategoryEntry):
        return {entry.name: [encode(child) for child in entry.entries]}
    raise TypeError(f"not a nav entry: {entry!r}")


def encode_all(entries: Iterable[NavEntry]) -> list[Any]:
    return [encode(entry) for entry in entries]


def _named(name: str | None, value: Any) -> Any:
    return value if name is None else {name: value}
