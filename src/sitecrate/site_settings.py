"""Settings section: site configuration parts as attribute sets.

Only plain ``str``, ``bool`` and ``int`` settings that can be written back
are exported.  The same rule decides what an import may set, so a
settings recipe round-trips through ``apply_settings``.
"""

from __future__ import annotations

import logging
import typing
import xml.etree.ElementTree as ET

from sitecrate.site import Site, SitePart

logger = logging.getLogger(__name__)

SUPPORTED_TYPES: tuple[type, ...] = (str, bool, int)


def _writable_settings(cls: type[SitePart]) -> dict[str, type]:
    """Map each exportable setting name on ``cls`` to its value type."""
    settings: dict[str, type] = {}
    frozen_model = bool(cls.model_config.get("frozen"))

    for name, info in cls.model_fields.items():
        if frozen_model or info.frozen:
            continue
        if info.annotation in SUPPORTED_TYPES:
            settings[name] = info.annotation

    properties: dict[str, property] = {}
    for klass in reversed(cls.__mro__):
        for name, member in vars(klass).items():
            if isinstance(member, property):
                properties[name] = member

    for name, member in properties.items():
        if member.fset is None:
            continue
        try:
            annotation = typing.get_type_hints(member.fget).get("return")
        except (NameError, TypeError):
            continue
        if annotation in SUPPORTED_TYPES:
            settings[name] = annotation

    return settings


def _format_value(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def supported_settings(part: SitePart) -> dict[str, str]:
    """Return the exportable settings of ``part`` as attribute strings."""
    values: dict[str, str] = {}
    for name in _writable_settings(type(part)):
        value = getattr(part, name)
        if value is None:
            continue
        values[name] = _format_value(value)
    return values


def export_site_settings(site: Site) -> ET.Element:
    """Build ``<Settings>`` with one child per part that has settings."""
    settings = ET.Element("Settings")
    for part in site.parts:
        values = supported_settings(part)
        if not values:
            logger.debug("Skipping %s: no exportable settings", part.definition_name())
            continue
        setting = ET.SubElement(settings, part.definition_name())
        for name, value in values.items():
            setting.set(name, value)
    return settings


def _parse_value(raw: str, value_type: type) -> object:
    if value_type is bool:
        text = raw.strip().lower()
        if text not in ("true", "false"):
            raise ValueError(f"Invalid boolean setting value: {raw!r}")
        return text == "true"
    if value_type is int:
        return int(raw)
    return raw


def apply_settings(part: SitePart, attributes: dict[str, str]) -> list[str]:
    """Set exportable settings on ``part`` from attribute strings.

    Unknown or read-only names are ignored.  Returns the names applied.

    Raises:
        ValueError: If a value cannot be parsed as the setting's type.
    """
    writable = _writable_settings(type(part))
    applied: list[str] = []
    for name, raw in attributes.items():
        value_type = writable.get(name)
        if value_type is None:
            logger.debug("Ignoring setting %s.%s", part.definition_name(), name)
            continue
        setattr(part, name, _parse_value(raw, value_type))
        applied.append(name)
    return applied
