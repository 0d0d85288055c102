"""Data section: content items selected by version policy and type."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterable

from sitecrate.interfaces import ContentManager
from sitecrate.models import VersionHistoryOptions, VersionOptions

logger = logging.getLogger(__name__)


def version_options_for(history: VersionHistoryOptions) -> VersionOptions:
    """Resolve requested version history to a query policy.

    Drafts win whenever they are requested; everything else, including
    an empty flag set, selects published versions.
    """
    if VersionHistoryOptions.DRAFT in history:
        return VersionOptions.DRAFT
    return VersionOptions.PUBLISHED


def export_data(
    content_types: Iterable[str],
    history: VersionHistoryOptions,
    content_manager: ContentManager,
) -> ET.Element:
    """Build ``<Data>`` with one element per exportable content item.

    Items are queried once under the resolved policy, then emitted type
    by type in the order the caller listed the types.
    """
    data = ET.Element("Data")
    options = version_options_for(history)
    content_items = content_manager.query(options)

    for content_type in content_types:
        for item in content_items:
            if item.content_type != content_type:
                continue
            element = content_manager.export(item)
            if element is None:
                logger.debug("No export for %s %s", item.content_type, item.identity)
                continue
            data.append(element)

    logger.debug("Exported %d content items (%s)", len(data), options)
    return data
