"""Content definition registry and its XML writer/reader.

Types are written as ``<TypeName DisplayName=".." setting=".."/>`` with
one child element per attached part carrying that attachment's settings.
Parts are written as ``<PartName setting=".."/>``.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from sitecrate.interfaces import ContentDefinitionManager, ContentDefinitionWriter
from sitecrate.models import PartDefinition, TypeDefinition, TypePartDefinition

logger = logging.getLogger(__name__)

DISPLAY_NAME_ATTRIBUTE = "DisplayName"


class InMemoryContentDefinitionManager(ContentDefinitionManager):
    """Definition registry that keeps insertion order.

    Part definitions are held once; types returned from the registry
    always carry the current definition of each attached part.
    """

    def __init__(
        self,
        types: list[TypeDefinition] | None = None,
        parts: list[PartDefinition] | None = None,
    ) -> None:
        self._types: dict[str, TypeDefinition] = {}
        self._parts: dict[str, PartDefinition] = {}
        for part in parts or []:
            self.store_part_definition(part)
        for type_definition in types or []:
            self.store_type_definition(type_definition)

    def _resolve(self, definition: TypeDefinition) -> TypeDefinition:
        parts = [
            TypePartDefinition(
                part_definition=self._parts.get(tp.part_definition.name, tp.part_definition),
                settings=dict(tp.settings),
            )
            for tp in definition.parts
        ]
        return definition.model_copy(update={"parts": parts})

    def list_type_definitions(self) -> list[TypeDefinition]:
        return [self._resolve(d) for d in self._types.values()]

    def get_type_definition(self, name: str) -> TypeDefinition | None:
        definition = self._types.get(name)
        return self._resolve(definition) if definition is not None else None

    def list_part_definitions(self) -> list[PartDefinition]:
        return list(self._parts.values())

    def get_part_definition(self, name: str) -> PartDefinition | None:
        return self._parts.get(name)

    def store_type_definition(self, definition: TypeDefinition) -> None:
        for type_part in definition.parts:
            if type_part.part_definition.name not in self._parts:
                self._parts[type_part.part_definition.name] = type_part.part_definition
        self._types[definition.name] = definition
        logger.debug("Stored type definition %s", definition.name)

    def store_part_definition(self, definition: PartDefinition) -> None:
        self._parts[definition.name] = definition
        logger.debug("Stored part definition %s", definition.name)


class XmlContentDefinitionWriter(ContentDefinitionWriter):
    def export_type(self, definition: TypeDefinition) -> ET.Element:
        element = ET.Element(definition.name)
        if definition.display_name:
            element.set(DISPLAY_NAME_ATTRIBUTE, definition.display_name)
        for key, value in definition.settings.items():
            element.set(key, value)
        for type_part in definition.parts:
            ET.SubElement(element, type_part.part_definition.name, dict(type_part.settings))
        return element

    def export_part(self, definition: PartDefinition) -> ET.Element:
        return ET.Element(definition.name, dict(definition.settings))


class XmlContentDefinitionReader:
    """Rebuilds definitions from elements produced by the writer."""

    def __init__(self, definition_manager: ContentDefinitionManager) -> None:
        self._definitions = definition_manager

    def read_part(self, element: ET.Element) -> PartDefinition:
        return PartDefinition(name=element.tag, settings=dict(element.attrib))

    def read_type(self, element: ET.Element) -> TypeDefinition:
        settings = dict(element.attrib)
        display_name = settings.pop(DISPLAY_NAME_ATTRIBUTE, "")
        parts = []
        for child in element:
            part_definition = self._definitions.get_part_definition(child.tag)
            if part_definition is None:
                part_definition = PartDefinition(name=child.tag)
            parts.append(
                TypePartDefinition(part_definition=part_definition, settings=dict(child.attrib))
            )
        return TypeDefinition(
            name=element.tag,
            display_name=display_name,
            settings=settings,
            parts=parts,
        )
