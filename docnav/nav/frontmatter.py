"""Leading metadata block: split, decode and render.

    ---
    name: Optional display name
    nav:
      - intro.md
      - Guides: guides/
    ---
    # Title

The block is YAML. The loader below keeps `!tag` values as `Tagged` so the
nav codec can interpret them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml
from frontmatter.default_handlers import YAMLHandler

from ..errors import DecodeError
from .entries import NavEntry, Tagged, decode_all, encode_all

KNOWN_KEYS = ("name", "nav")

_handler = YAMLHandler()


class NavLoader(yaml.SafeLoader):
    """SafeLoader that wraps unknown `!tag` nodes in `Tagged`."""


class NavDumper(yaml.SafeDumper):
    """SafeDumper that writes `Tagged` values back as `!tag value`.

    PyYAML only emits plain scalars for implicitly tagged values, so a local
    tag would always come out quoted (`!index 'a.md'`).
    """

    def choose_scalar_style(self):
        style = super().choose_scalar_style()
        if style == "'" and self._is_plain_local_tag():
            return ""
        return style

    def _is_plain_local_tag(self) -> bool:
        event = self.event
        if event.style or not event.tag or not event.tag.startswith("!") or event.tag.startswith("!!"):
            return False
        if self.simple_key_context and (self.analysis.empty or self.analysis.multiline):
            return False
        if self.flow_level:
            return self.analysis.allow_flow_plain
        return self.analysis.allow_block_plain


def _construct_tagged(loader: NavLoader, tag_suffix: str, node: yaml.Node) -> Tagged:
    if isinstance(node, yaml.ScalarNode):
        value: Any = loader.construct_scalar(node)
    elif isinstance(node, yaml.SequenceNode):
        value = loader.construct_sequence(node, deep=True)
    else:
        value = loader.construct_mapping(node, deep=True)
    return Tagged(tag_suffix, value)


def _represent_tagged(dumper: NavDumper, data: Tagged) -> yaml.Node:
    return dumper.represent_scalar(f"!{data.tag}", data.value)


NavLoader.add_multi_constructor("!", _construct_tagged)
NavDumper.add_representer(Tagged, _represent_tagged)


@dataclass(frozen=True)
class FrontMatter:
    """Decoded metadata block. The schema is closed."""

    name: str | None = None
    nav: list[NavEntry] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.name is None and not self.nav

    @classmethod
    def from_value(cls, data: Any) -> FrontMatter:
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise DecodeError("metadata block must be a mapping", value=data)

        unknown = [key for key in data if key not in KNOWN_KEYS]
        if unknown:
            raise DecodeError(
                f"unknown metadata field(s): {', '.join(map(str, unknown))} (expected one of {', '.join(KNOWN_KEYS)})",
                value=data,
            )

        name = data.get("name")
        if name is not None and not isinstance(name, str):
            raise DecodeError("metadata name must be a string", value=name)

        nav = data.get("nav", [])
        if not isinstance(nav, list):
            raise DecodeError("metadata nav must be a sequence", value=nav)

        return cls(name=name, nav=decode_all(nav))

    def to_value(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.name is not None:
            data["name"] = self.name
        if self.nav:
            data["nav"] = encode_all(self.nav)
        return data


def load_yaml(text: str) -> Any:
    try:
        return _handler.load(text, Loader=NavLoader)
    except yaml.YAMLError as exc:
        raise DecodeError(f"invalid YAML in metadata block: {exc}", value=text) from exc


def dump_yaml(data: Any) -> str:
    return _handler.export(data, Dumper=NavDumper, sort_keys=False)


def split_metadata(raw: str) -> tuple[FrontMatter | None, str]:
    """Split a document into its decoded metadata block and body.

    Returns `(None, raw)` when the document has no metadata block.
    """
    if not _handler.detect(raw):
        return None, raw
    try:
        fm_text, body = _handler.split(raw)
    except ValueError as exc:
        raise DecodeError("unclosed metadata block") from exc
    return FrontMatter.from_value(load_yaml(fm_text)), body


def render_metadata(fm: FrontMatter | None) -> str:
    """Render a metadata block, or "" when there is nothing to render."""
    if fm is None or fm.is_empty:
        return ""
    return f"---\n{dump_yaml(fm.to_value())}\n---\n"
