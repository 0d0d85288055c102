"""Tests for recipe parsing, the recipe manager and step handlers."""

import xml.etree.ElementTree as ET
from unittest.mock import MagicMock

import pytest

from sitecrate.content import InMemoryContentManager
from sitecrate.definitions import InMemoryContentDefinitionManager
from sitecrate.errors import RecipeExecutionError, RecipeParseError
from sitecrate.models import Recipe, RecipeStep, TypeDefinition, User
from sitecrate.recipes import (
    DataRecipeHandler,
    MetadataRecipeHandler,
    RecipeHandler,
    RecipeManager,
    SettingsRecipeHandler,
    XmlRecipeParser,
)
from sitecrate.site import CommentSettingsPart, Site, StaticWorkContext

RECIPE = """<?xml version="1.0" standalone="yes"?>
<!--Exported from sitecrate-->
<SiteCrate>
  <Recipe>
    <Name>Blog setup</Name>
    <Description> Sets up a blog </Description>
    <Author>alice</Author>
    <Version>2</Version>
  </Recipe>
  <Metadata><Types/><Parts/></Metadata>
  <Settings/>
  <Data/>
</SiteCrate>
"""


def _step(xml: str) -> RecipeStep:
    element = ET.fromstring(xml)
    return RecipeStep(name=element.tag, step=element)


class TestXmlRecipeParser:
    """Test parsing recipe text."""

    def test_header(self):
        recipe = XmlRecipeParser().parse_recipe(RECIPE)
        assert recipe.name == "Blog setup"
        assert recipe.description == "Sets up a blog"
        assert recipe.author == "alice"
        assert recipe.version == "2"

    def test_steps_in_document_order(self):
        recipe = XmlRecipeParser().parse_recipe(RECIPE)
        assert [step.name for step in recipe.steps] == ["Metadata", "Settings", "Data"]
        assert recipe.steps[0].step.find("Types") is not None

    def test_missing_header(self):
        recipe = XmlRecipeParser().parse_recipe("<Crate><Data/></Crate>")
        assert recipe.name == ""
        assert [step.name for step in recipe.steps] == ["Data"]

    def test_malformed(self):
        with pytest.raises(RecipeParseError, match="Malformed recipe"):
            XmlRecipeParser().parse_recipe("<Crate><Data></Crate>")

    def test_empty_text(self):
        with pytest.raises(RecipeParseError):
            XmlRecipeParser().parse_recipe("")


class _Recorder(RecipeHandler):
    def __init__(self, step_name: str, calls: list[str], error: Exception | None = None):
        self.step_name = step_name
        self.calls = calls
        self.error = error

    def execute_step(self, step: RecipeStep) -> None:
        self.calls.append(step.name)
        if self.error is not None:
            raise self.error


class TestRecipeManager:
    """Test step dispatch and error handling."""

    def test_dispatches_by_step_name(self):
        calls: list[str] = []
        manager = RecipeManager([_Recorder("Data", calls), _Recorder("Settings", calls)])
        recipe = Recipe(steps=[_step("<Settings/>"), _step("<Data/>"), _step("<Settings/>")])
        execution_id = manager.execute(recipe)
        assert calls == ["Settings", "Data", "Settings"]
        assert len(execution_id) == 32

    def test_unique_execution_ids(self):
        manager = RecipeManager([])
        assert manager.execute(Recipe()) != manager.execute(Recipe())

    def test_unhandled_step(self):
        manager = RecipeManager([])
        with pytest.raises(RecipeExecutionError) as excinfo:
            manager.execute(Recipe(steps=[_step("<Widgets/>")]))
        assert excinfo.value.step == "Widgets"

    def test_handler_failure_wrapped(self):
        manager = RecipeManager([_Recorder("Data", [], error=ValueError("bad item"))])
        with pytest.raises(RecipeExecutionError, match="bad item") as excinfo:
            manager.execute(Recipe(steps=[_step("<Data/>")]))
        assert isinstance(excinfo.value.__cause__, ValueError)

    def test_execution_error_not_rewrapped(self):
        error = RecipeExecutionError("original", step="Data")
        manager = RecipeManager([_Recorder("Data", [], error=error)])
        with pytest.raises(RecipeExecutionError) as excinfo:
            manager.execute(Recipe(steps=[_step("<Data/>")]))
        assert excinfo.value is error

    def test_stops_at_first_failure(self):
        calls: list[str] = []
        manager = RecipeManager(
            [_Recorder("Data", calls, error=RuntimeError("boom")), _Recorder("Settings", calls)]
        )
        with pytest.raises(RecipeExecutionError):
            manager.execute(Recipe(steps=[_step("<Data/>"), _step("<Settings/>")]))
        assert calls == ["Data"]


class TestMetadataRecipeHandler:
    """Test importing definitions."""

    def test_stores_parts_then_types(self):
        definitions = InMemoryContentDefinitionManager()
        step = _step(
            "<Metadata>"
            '<Types><Page DisplayName="Page"><TitlePart Position="1"/></Page></Types>'
            '<Parts><TitlePart Attachable="true"/></Parts>'
            "</Metadata>"
        )
        MetadataRecipeHandler(definitions).execute_step(step)

        page = definitions.get_type_definition("Page")
        assert page.display_name == "Page"
        assert page.parts[0].part_definition.settings == {"Attachable": "true"}
        assert page.parts[0].settings == {"Position": "1"}


class TestSettingsRecipeHandler:
    """Test applying site settings."""

    def test_applies_known_parts(self):
        site = Site([CommentSettingsPart()])
        handler = SettingsRecipeHandler(StaticWorkContext(User(user_name="a"), site))
        handler.execute_step(
            _step(
                "<Settings>"
                '<CommentSettingsPart moderate_comments="true"/>'
                '<UnknownPart x="1"/>'
                "</Settings>"
            )
        )
        assert site.parts[0].moderate_comments is True

    def test_invalid_bool_fails_recipe(self):
        site = Site([CommentSettingsPart()])
        manager = RecipeManager(
            [SettingsRecipeHandler(StaticWorkContext(User(user_name="a"), site))]
        )
        step = _step('<Settings><CommentSettingsPart moderate_comments="yes"/></Settings>')
        with pytest.raises(RecipeExecutionError, match="Invalid boolean") as excinfo:
            manager.execute(Recipe(steps=[step]))
        assert isinstance(excinfo.value.__cause__, ValueError)
        assert site.parts[0].moderate_comments is False


class TestDataRecipeHandler:
    """Test importing content items."""

    def test_imports_each_item(self):
        content_manager = MagicMock()
        DataRecipeHandler(content_manager).execute_step(
            _step('<Data><Page Id="a"/><BlogPost Id="b"/></Data>')
        )
        assert [c.args[0].get("Id") for c in content_manager.import_item.call_args_list] == [
            "a",
            "b",
        ]

    def test_items_visible_after_import(self):
        definitions = InMemoryContentDefinitionManager(types=[TypeDefinition(name="Page")])
        content = InMemoryContentManager(definitions)
        DataRecipeHandler(content).execute_step(
            _step(
                '<Data><Page Id="p1" Status="Published"><TitlePart Title="Hi"/></Page>'
                '<Page Id="p2" Status="Draft"/></Data>'
            )
        )
        assert [item.identity for item in content.items] == ["p1", "p2"]
        assert content.items[0].parts == {"TitlePart": {"Title": "Hi"}}
        assert content.items[1].published is False
