"""Tests for the export document skeleton and its serialization."""

import xml.etree.ElementTree as ET

from sitecrate.document import (
    DEFAULT_GENERATOR_NAME,
    DEFAULT_ROOT_ELEMENT,
    EXPORT_COMMENT,
    create_export_root,
)


class TestCreateExportRoot:
    """Test the document skeleton."""

    def test_recipe_header(self):
        document = create_export_root("alice")
        recipe = document.section("Recipe")
        assert recipe is not None
        assert recipe.findtext("Name") == DEFAULT_GENERATOR_NAME
        assert recipe.findtext("Author") == "alice"

    def test_default_root_element(self):
        document = create_export_root("alice")
        assert document.root.tag == DEFAULT_ROOT_ELEMENT
        assert [child.tag for child in document.root] == ["Recipe"]

    def test_custom_generator_and_root(self):
        document = create_export_root("bob", generator_name="Nightly", root_element="Crate")
        assert document.root.tag == "Crate"
        assert document.root.findtext("Recipe/Name") == "Nightly"


class TestExportDocument:
    """Test section access and serialization."""

    def test_add_appends_in_order(self):
        document = create_export_root("alice")
        document.add(ET.Element("Metadata"))
        document.add(ET.Element("Data"))
        assert [child.tag for child in document.root] == ["Recipe", "Metadata", "Data"]

    def test_section_missing(self):
        document = create_export_root("alice")
        assert document.section("Settings") is None

    def test_to_xml_declaration_and_comment(self):
        text = create_export_root("alice").to_xml()
        lines = text.splitlines()
        assert lines[0] == '<?xml version="1.0" standalone="yes"?>'
        assert lines[1] == f"<!--{EXPORT_COMMENT}-->"
        assert text.endswith("\n")

    def test_to_xml_parses_back(self):
        document = create_export_root("alice")
        ET.SubElement(document.root, "Settings")
        parsed = ET.fromstring(document.to_xml())
        assert parsed.findtext("Recipe/Author") == "alice"
        assert parsed.find("Settings") is not None

    def test_to_xml_does_not_indent_live_tree(self):
        document = create_export_root("alice")
        document.to_xml(indent="    ")
        assert document.root.text is None
        assert document.root.find("Recipe").tail is None

    def test_to_xml_without_indent(self):
        text = create_export_root("alice").to_xml(indent="")
        assert "<Recipe><Name>" in text
