"""JSON-backed site snapshot.

Persists definitions, site settings, content items and the shell
descriptor in a single JSON file under the site's data directory, and
wires the in-memory collaborators into an ``ImportExportService``.
The snapshot is saved whenever the shell descriptor changes, which is
the last step of every successful import.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from sitecrate.config import SiteCrateConfig
from sitecrate.content import InMemoryContentManager
from sitecrate.definitions import InMemoryContentDefinitionManager, XmlContentDefinitionWriter
from sitecrate.hooks import ExportEventHandler
from sitecrate.models import (
    ContentItem,
    PartDefinition,
    ShellDescriptor,
    TypeDefinition,
    User,
)
from sitecrate.recipes import RecipeManager, XmlRecipeParser, default_recipe_handlers
from sitecrate.service import ImportExportService
from sitecrate.shell import InMemoryShellDescriptorManager
from sitecrate.site import Site, SitePart, StaticWorkContext, default_site_parts, site_part_type
from sitecrate.storage import LocalAppDataFolder

logger = logging.getLogger(__name__)

SITE_FILENAME = "site.json"


class _SiteData(BaseModel):
    """Internal wrapper for JSON serialization."""

    types: list[TypeDefinition] = Field(default_factory=list)
    parts: list[PartDefinition] = Field(default_factory=list)
    settings: dict[str, dict[str, Any]] = Field(default_factory=dict)
    items: list[ContentItem] = Field(default_factory=list)
    shell: ShellDescriptor = Field(default_factory=ShellDescriptor)


class SiteStore:
    """A site persisted as ``site.json`` in ``data_dir``."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)
        self._path = self.data_dir / SITE_FILENAME
        data = self._load()

        self.definitions = InMemoryContentDefinitionManager(types=data.types, parts=data.parts)
        self.content = InMemoryContentManager(self.definitions, items=data.items)
        self.site = Site(self._load_parts(data.settings))
        self.shell = InMemoryShellDescriptorManager(
            data.shell, on_change=[lambda _descriptor: self.save()]
        )

    @property
    def path(self) -> Path:
        return self._path

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> _SiteData:
        if not self._path.exists():
            return _SiteData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _SiteData.model_validate(raw)
        except (json.JSONDecodeError, ValueError, KeyError):
            logger.warning("Corrupt site snapshot at %s, starting fresh", self._path)
            return _SiteData()

    @staticmethod
    def _load_parts(settings: dict[str, dict[str, Any]]) -> list[SitePart]:
        parts: list[SitePart] = []
        for name, values in settings.items():
            part_type = site_part_type(name)
            if part_type is None:
                logger.warning("Unknown site part %s in snapshot, dropping", name)
                continue
            parts.append(part_type.model_validate(values))
        loaded = {part.definition_name() for part in parts}
        parts.extend(p for p in default_site_parts() if p.definition_name() not in loaded)
        return parts

    # ── Persistence ──────────────────────────────────────────────

    def save(self) -> None:
        data = _SiteData(
            types=self.definitions.list_type_definitions(),
            parts=self.definitions.list_part_definitions(),
            settings={part.definition_name(): part.model_dump() for part in self.site.parts},
            items=self.content.items,
            shell=self.shell.get_shell_descriptor(),
        )
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._path.write_text(data.model_dump_json(indent=2), encoding="utf-8")
        logger.debug("Saved site snapshot to %s", self._path)

    # ── Wiring ───────────────────────────────────────────────────

    def service(
        self,
        user_name: str | None,
        config: SiteCrateConfig | None = None,
        export_event_handlers: Sequence[ExportEventHandler] = (),
    ) -> ImportExportService:
        """Build an import/export service acting as ``user_name``."""
        config = config or SiteCrateConfig()
        user = User(user_name=user_name) if user_name else None
        work_context = StaticWorkContext(user, self.site)
        return ImportExportService(
            work_context=work_context,
            content_definition_manager=self.definitions,
            content_definition_writer=XmlContentDefinitionWriter(),
            content_manager=self.content,
            app_data_folder=LocalAppDataFolder(self.data_dir),
            recipe_parser=XmlRecipeParser(),
            recipe_manager=RecipeManager(
                default_recipe_handlers(self.definitions, self.content, work_context)
            ),
            shell_descriptor_manager=self.shell,
            export_event_handlers=export_event_handlers,
            exports_directory=config.export.directory,
            generator_name=config.export.generator_name,
            root_element=config.export.root_element,
            indent=config.export.indent,
        )
