"""In-memory versioned content manager.

Each content record is identified by a stable ``identity`` and stored as
a list of versions.  At most one version of a record is published and
exactly one is the latest.
"""

from __future__ import annotations

import logging
import uuid
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import Any

from sitecrate.interfaces import ContentDefinitionManager, ContentManager
from sitecrate.models import ContentItem, VersionOptions

logger = logging.getLogger(__name__)

STATUS_PUBLISHED = "Published"
STATUS_DRAFT = "Draft"


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ContentItemExporter(ABC):
    """Serializes content items of one or more types."""

    @abstractmethod
    def export(self, item: ContentItem) -> ET.Element | None:
        """Return the item's element, or None when it has no exportable form."""


class PartsContentExporter(ContentItemExporter):
    """Writes an item as ``<Type Id=".." Status=".."><Part attr=".."/></Type>``.

    Items whose type is not in the definition registry (transient types)
    are declined.
    """

    def __init__(self, definition_manager: ContentDefinitionManager) -> None:
        self._definitions = definition_manager

    def export(self, item: ContentItem) -> ET.Element | None:
        if self._definitions.get_type_definition(item.content_type) is None:
            return None
        element = ET.Element(
            item.content_type,
            {
                "Id": item.identity,
                "Status": STATUS_PUBLISHED if item.published else STATUS_DRAFT,
            },
        )
        for part_name, values in item.parts.items():
            ET.SubElement(
                element,
                part_name,
                {key: _format_value(value) for key, value in values.items() if value is not None},
            )
        return element


class InMemoryContentManager(ContentManager):
    def __init__(
        self,
        definition_manager: ContentDefinitionManager,
        items: list[ContentItem] | None = None,
    ) -> None:
        self._items: list[ContentItem] = list(items or [])
        self._default_exporter: ContentItemExporter = PartsContentExporter(definition_manager)
        self._exporters: dict[str, ContentItemExporter] = {}

    @property
    def items(self) -> list[ContentItem]:
        """Every stored version, in insertion order."""
        return list(self._items)

    def register_exporter(self, content_type: str, exporter: ContentItemExporter) -> None:
        """Use ``exporter`` instead of the default for ``content_type``."""
        self._exporters[content_type] = exporter

    def _versions(self, identity: str) -> list[ContentItem]:
        return [item for item in self._items if item.identity == identity]

    def _next_id(self) -> int:
        return max((item.id for item in self._items), default=0) + 1

    # ── Write operations ─────────────────────────────────────────

    def create(
        self,
        content_type: str,
        parts: dict[str, dict[str, Any]] | None = None,
        *,
        identity: str | None = None,
        publish: bool = True,
    ) -> ContentItem:
        """Add a new version of a record, creating the record if needed.

        The new version becomes the latest.  When ``publish`` is set it also
        replaces any previously published version.
        """
        identity = identity or uuid.uuid4().hex
        versions = self._versions(identity)
        for version in versions:
            version.latest = False
            if publish:
                version.published = False

        item = ContentItem(
            id=versions[0].id if versions else self._next_id(),
            identity=identity,
            content_type=content_type,
            version=max((v.version for v in versions), default=0) + 1,
            published=publish,
            latest=True,
            parts=parts or {},
        )
        self._items.append(item)
        logger.debug(
            "Stored %s %s version %d (published=%s)",
            content_type,
            identity,
            item.version,
            publish,
        )
        return item

    def import_item(self, element: ET.Element) -> ContentItem:
        return self.create(
            element.tag,
            {child.tag: dict(child.attrib) for child in element},
            identity=element.get("Id") or None,
            publish=element.get("Status", STATUS_PUBLISHED) == STATUS_PUBLISHED,
        )

    # ── Read operations ──────────────────────────────────────────

    def query(self, options: VersionOptions) -> list[ContentItem]:
        if options is VersionOptions.DRAFT:
            return [item for item in self._items if item.latest]
        return [item for item in self._items if item.published]

    def export(self, item: ContentItem) -> ET.Element | None:
        exporter = self._exporters.get(item.content_type, self._default_exporter)
        return exporter.export(item)
