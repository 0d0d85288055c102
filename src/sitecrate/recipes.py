"""Recipe parsing and execution.

A recipe is an XML document whose root holds an optional ``Recipe``
header (Name, Description, Author, Version) followed by steps.  Every
other child of the root is a step, named by its tag and executed in
document order by the handlers registered for that name.
"""

from __future__ import annotations

import logging
import uuid
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from collections.abc import Iterable

from sitecrate.definitions import XmlContentDefinitionReader
from sitecrate.errors import RecipeExecutionError, RecipeParseError
from sitecrate.interfaces import (
    ContentDefinitionManager,
    ContentManager,
    RecipeExecutor,
    RecipeParser,
    WorkContext,
)
from sitecrate.models import Recipe, RecipeStep
from sitecrate.site_settings import apply_settings

logger = logging.getLogger(__name__)

RECIPE_HEADER = "Recipe"


def _child_text(element: ET.Element, name: str) -> str:
    return (element.findtext(name) or "").strip()


class XmlRecipeParser(RecipeParser):
    def parse_recipe(self, recipe_text: str) -> Recipe:
        try:
            root = ET.fromstring(recipe_text)
        except ET.ParseError as exc:
            raise RecipeParseError(f"Malformed recipe: {exc}") from exc

        recipe = Recipe()
        for element in root:
            if element.tag == RECIPE_HEADER:
                recipe.name = _child_text(element, "Name")
                recipe.description = _child_text(element, "Description")
                recipe.author = _child_text(element, "Author")
                recipe.version = _child_text(element, "Version")
                continue
            recipe.steps.append(RecipeStep(name=element.tag, step=element))
        return recipe


class RecipeHandler(ABC):
    """Executes recipe steps with a given name."""

    step_name: str = ""

    @abstractmethod
    def execute_step(self, step: RecipeStep) -> None: ...


class RecipeManager(RecipeExecutor):
    """Runs each recipe step through the handlers registered for it."""

    def __init__(self, handlers: Iterable[RecipeHandler]) -> None:
        self._handlers = list(handlers)

    def execute(self, recipe: Recipe) -> str:
        execution_id = uuid.uuid4().hex
        logger.info(
            "Executing recipe %r (%d steps, execution %s)",
            recipe.name,
            len(recipe.steps),
            execution_id,
        )
        for step in recipe.steps:
            handlers = [h for h in self._handlers if h.step_name == step.name]
            if not handlers:
                raise RecipeExecutionError(
                    f"No handler for recipe step {step.name!r}", step=step.name
                )
            for handler in handlers:
                try:
                    handler.execute_step(step)
                except RecipeExecutionError:
                    raise
                except Exception as exc:
                    raise RecipeExecutionError(
                        f"Recipe step {step.name!r} failed: {exc}", step=step.name
                    ) from exc
            logger.debug("Executed step %s", step.name)
        return execution_id


class MetadataRecipeHandler(RecipeHandler):
    """Stores the part and type definitions of a Metadata step."""

    step_name = "Metadata"

    def __init__(self, definition_manager: ContentDefinitionManager) -> None:
        self._definitions = definition_manager
        self._reader = XmlContentDefinitionReader(definition_manager)

    def execute_step(self, step: RecipeStep) -> None:
        # Parts first so types pick up the imported part settings.
        for element in step.step.findall("Parts/*"):
            self._definitions.store_part_definition(self._reader.read_part(element))
        for element in step.step.findall("Types/*"):
            self._definitions.store_type_definition(self._reader.read_type(element))


class SettingsRecipeHandler(RecipeHandler):
    """Applies a Settings step to the current site's parts."""

    step_name = "Settings"

    def __init__(self, work_context: WorkContext) -> None:
        self._work_context = work_context

    def execute_step(self, step: RecipeStep) -> None:
        site = self._work_context.current_site
        for element in step.step:
            part = site.get_part(element.tag)
            if part is None:
                logger.warning("Unknown site settings part %s, skipping", element.tag)
                continue
            apply_settings(part, dict(element.attrib))


class DataRecipeHandler(RecipeHandler):
    """Imports every content item of a Data step."""

    step_name = "Data"

    def __init__(self, content_manager: ContentManager) -> None:
        self._content_manager = content_manager

    def execute_step(self, step: RecipeStep) -> None:
        count = 0
        for element in step.step:
            self._content_manager.import_item(element)
            count += 1
        logger.info("Imported %d content items", count)


def default_recipe_handlers(
    definition_manager: ContentDefinitionManager,
    content_manager: ContentManager,
    work_context: WorkContext,
) -> list[RecipeHandler]:
    return [
        MetadataRecipeHandler(definition_manager),
        SettingsRecipeHandler(work_context),
        DataRecipeHandler(content_manager),
    ]
