"""Abstract collaborators consumed by the import/export service.

The service only talks to these interfaces.  Default implementations
live in ``sitecrate.definitions``, ``sitecrate.content``,
``sitecrate.recipes``, ``sitecrate.shell``, ``sitecrate.site`` and
``sitecrate.storage``.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from sitecrate.models import (
    ContentItem,
    PartDefinition,
    Recipe,
    ShellDescriptor,
    ShellParameter,
    TypeDefinition,
    User,
    VersionOptions,
)

if TYPE_CHECKING:
    from sitecrate.site import Site


class ContentDefinitionManager(ABC):
    """Registry of content type and part definitions."""

    @abstractmethod
    def list_type_definitions(self) -> list[TypeDefinition]:
        """Return all type definitions in registry order."""

    @abstractmethod
    def get_type_definition(self, name: str) -> TypeDefinition | None:
        """Return a type definition by name, or None."""

    @abstractmethod
    def get_part_definition(self, name: str) -> PartDefinition | None:
        """Return a part definition by name, or None."""

    @abstractmethod
    def store_type_definition(self, definition: TypeDefinition) -> None:
        """Insert or replace a type definition."""

    @abstractmethod
    def store_part_definition(self, definition: PartDefinition) -> None:
        """Insert or replace a part definition."""


class ContentDefinitionWriter(ABC):
    """Serializes definitions to XML elements."""

    @abstractmethod
    def export_type(self, definition: TypeDefinition) -> ET.Element: ...

    @abstractmethod
    def export_part(self, definition: PartDefinition) -> ET.Element: ...


class ContentManager(ABC):
    """Versioned content store."""

    @abstractmethod
    def query(self, options: VersionOptions) -> list[ContentItem]:
        """Return every item version selected by ``options``."""

    @abstractmethod
    def export(self, item: ContentItem) -> ET.Element | None:
        """Serialize an item, or return None if it has no exportable form."""

    @abstractmethod
    def import_item(self, element: ET.Element) -> ContentItem:
        """Create or update an item from its exported element."""


class RecipeParser(ABC):
    @abstractmethod
    def parse_recipe(self, recipe_text: str) -> Recipe:
        """Parse recipe text.

        Raises:
            RecipeParseError: If the text is malformed.
        """


class RecipeExecutor(ABC):
    @abstractmethod
    def execute(self, recipe: Recipe) -> str:
        """Apply every step of ``recipe`` and return an execution id.

        Raises:
            RecipeExecutionError: If any step fails.
        """


class ShellDescriptorManager(ABC):
    @abstractmethod
    def get_shell_descriptor(self) -> ShellDescriptor: ...

    @abstractmethod
    def update_shell_descriptor(
        self,
        prior_serial_number: int,
        features: list[str],
        parameters: list[ShellParameter],
    ) -> None:
        """Save a new descriptor version.

        Raises:
            ShellDescriptorError: If ``prior_serial_number`` is stale.
        """


class AppDataFolder(ABC):
    """Filesystem abstraction rooted at the application data directory.

    Paths passed in are relative to that root.
    """

    @abstractmethod
    def directory_exists(self, path: str) -> bool: ...

    @abstractmethod
    def create_directory(self, path: str) -> None: ...

    @abstractmethod
    def create_file(self, path: str, content: str) -> None: ...

    @abstractmethod
    def combine(self, *paths: str) -> str: ...

    @abstractmethod
    def map_path(self, path: str) -> str:
        """Resolve a relative app-data path to an absolute filesystem path."""


class WorkContext(ABC):
    """The acting user and the current site."""

    @property
    @abstractmethod
    def current_user(self) -> User | None: ...

    @property
    @abstractmethod
    def current_site(self) -> Site: ...
