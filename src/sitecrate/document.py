"""Export document: the XML tree an export is assembled into."""

from __future__ import annotations

import copy
import xml.etree.ElementTree as ET
from dataclasses import dataclass

DEFAULT_ROOT_ELEMENT = "SiteCrate"
DEFAULT_GENERATOR_NAME = "Generated by sitecrate"
EXPORT_COMMENT = "Exported from sitecrate"


@dataclass
class ExportDocument:
    """Declaration, provenance comment and root element of an export."""

    root: ET.Element
    comment: str = EXPORT_COMMENT
    version: str = "1.0"
    standalone: bool = True

    def add(self, element: ET.Element) -> None:
        """Append a top-level section under the root element."""
        self.root.append(element)

    def section(self, name: str) -> ET.Element | None:
        return self.root.find(name)

    def to_xml(self, indent: str = "  ") -> str:
        """Serialize the document to text.

        The root is indented on a copy so the in-progress tree is left as
        handlers built it.
        """
        root = copy.deepcopy(self.root)
        if indent:
            ET.indent(root, space=indent)
        standalone = ' standalone="yes"' if self.standalone else ""
        lines = [
            f'<?xml version="{self.version}"{standalone}?>',
            ET.tostring(ET.Comment(self.comment), encoding="unicode"),
            ET.tostring(root, encoding="unicode"),
        ]
        return "\n".join(lines) + "\n"


def create_export_root(
    user_name: str,
    generator_name: str = DEFAULT_GENERATOR_NAME,
    root_element: str = DEFAULT_ROOT_ELEMENT,
) -> ExportDocument:
    """Build the document skeleton stamped with generator and author."""
    root = ET.Element(root_element)
    recipe = ET.SubElement(root, "Recipe")
    ET.SubElement(recipe, "Name").text = generator_name
    ET.SubElement(recipe, "Author").text = user_name
    return ExportDocument(root=root)
