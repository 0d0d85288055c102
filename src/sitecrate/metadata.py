"""Metadata section: content type and part definitions."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterable

from sitecrate.interfaces import ContentDefinitionManager, ContentDefinitionWriter

logger = logging.getLogger(__name__)


def export_metadata(
    content_types: Iterable[str],
    definition_manager: ContentDefinitionManager,
    writer: ContentDefinitionWriter,
) -> ET.Element:
    """Build ``<Metadata><Types/><Parts/></Metadata>`` for the requested types.

    Types unknown to the registry are skipped.  A part shared by several
    types is written once, at its first occurrence.
    """
    requested = set(content_types)
    types_element = ET.Element("Types")
    parts_element = ET.Element("Parts")
    exported_parts: set[str] = set()

    types_to_export = [
        definition
        for definition in definition_manager.list_type_definitions()
        if definition.name in requested
    ]

    for type_definition in types_to_export:
        for type_part in type_definition.parts:
            part_definition = type_part.part_definition
            if part_definition.name in exported_parts:
                continue
            exported_parts.add(part_definition.name)
            parts_element.append(writer.export_part(part_definition))
        types_element.append(writer.export_type(type_definition))

    logger.debug(
        "Exported %d types and %d parts", len(types_to_export), len(exported_parts)
    )
    metadata = ET.Element("Metadata")
    metadata.append(types_element)
    metadata.append(parts_element)
    return metadata
