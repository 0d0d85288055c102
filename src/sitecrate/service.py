"""Import/export orchestration.

``ImportExportService.export`` assembles the requested sections into an
export document, notifies export handlers around assembly, and writes
the result to the app-data ``Exports`` folder.  ``import_recipe`` parses
and executes a recipe, then re-saves the shell descriptor so anything
cached against the previous descriptor is rebuilt.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from sitecrate.data import export_data
from sitecrate.document import (
    DEFAULT_GENERATOR_NAME,
    DEFAULT_ROOT_ELEMENT,
    ExportDocument,
    create_export_root,
)
from sitecrate.errors import CallerIdentityError
from sitecrate.hooks import ExportEventHandler, invoke_handlers
from sitecrate.interfaces import (
    AppDataFolder,
    ContentDefinitionManager,
    ContentDefinitionWriter,
    ContentManager,
    RecipeExecutor,
    RecipeParser,
    ShellDescriptorManager,
    WorkContext,
)
from sitecrate.metadata import export_metadata
from sitecrate.models import ExportContext, ExportOptions
from sitecrate.site_settings import export_site_settings
from sitecrate.storage import EXPORTS_DIRECTORY, write_export_file

logger = logging.getLogger(__name__)


class ImportExportService:
    """Exports site state to recipe documents and imports recipes."""

    def __init__(
        self,
        *,
        work_context: WorkContext,
        content_definition_manager: ContentDefinitionManager,
        content_definition_writer: ContentDefinitionWriter,
        content_manager: ContentManager,
        app_data_folder: AppDataFolder,
        recipe_parser: RecipeParser,
        recipe_manager: RecipeExecutor,
        shell_descriptor_manager: ShellDescriptorManager,
        export_event_handlers: Sequence[ExportEventHandler] = (),
        exports_directory: str = EXPORTS_DIRECTORY,
        generator_name: str = DEFAULT_GENERATOR_NAME,
        root_element: str = DEFAULT_ROOT_ELEMENT,
        indent: str = "  ",
    ) -> None:
        self._work_context = work_context
        self._definitions = content_definition_manager
        self._definition_writer = content_definition_writer
        self._content_manager = content_manager
        self._app_data = app_data_folder
        self._recipe_parser = recipe_parser
        self._recipe_manager = recipe_manager
        self._shell_descriptors = shell_descriptor_manager
        self._handlers = list(export_event_handlers)
        self._exports_directory = exports_directory
        self._generator_name = generator_name
        self._root_element = root_element
        self._indent = indent

    # ── Import ───────────────────────────────────────────────────

    def import_recipe(self, recipe_text: str) -> str:
        """Parse and execute a recipe, then bump the shell descriptor.

        Parse and execution errors propagate unchanged; the shell is only
        updated after the recipe ran to completion.

        Returns:
            The recipe manager's execution id.
        """
        recipe = self._recipe_parser.parse_recipe(recipe_text)
        execution_id = self._recipe_manager.execute(recipe)
        self._update_shell()
        logger.info("Imported recipe %r (execution %s)", recipe.name, execution_id)
        return execution_id

    def _update_shell(self) -> None:
        descriptor = self._shell_descriptors.get_shell_descriptor()
        self._shell_descriptors.update_shell_descriptor(
            descriptor.serial_number,
            descriptor.features,
            descriptor.parameters,
        )

    # ── Export ───────────────────────────────────────────────────

    def export(self, content_types: Iterable[str], export_options: ExportOptions) -> Path:
        """Export the requested sections and return the written file's path.

        Raises:
            CallerIdentityError: If there is no acting user.
            StorageError: If the export file cannot be written.
        """
        content_types = list(content_types)
        export_document = self._create_export_root()

        context = ExportContext(
            document=export_document,
            content_types=list(content_types),
            export_options=export_options,
        )

        invoke_handlers(self._handlers, lambda h: h.exporting(context), "exporting")

        if export_options.export_metadata:
            export_document.add(
                export_metadata(content_types, self._definitions, self._definition_writer)
            )

        if export_options.export_site_settings:
            export_document.add(export_site_settings(self._work_context.current_site))

        if export_options.export_data:
            export_document.add(
                export_data(
                    content_types,
                    export_options.version_history_options,
                    self._content_manager,
                )
            )

        invoke_handlers(self._handlers, lambda h: h.exported(context), "exported")

        return write_export_file(
            self._app_data,
            self._current_user_name(),
            export_document.to_xml(indent=self._indent),
            self._exports_directory,
        )

    def _current_user_name(self) -> str:
        user = self._work_context.current_user
        if user is None or not user.user_name:
            raise CallerIdentityError("Export requires an authenticated user")
        return user.user_name

    def _create_export_root(self) -> ExportDocument:
        return create_export_root(
            self._current_user_name(),
            generator_name=self._generator_name,
            root_element=self._root_element,
        )
