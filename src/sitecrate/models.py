"""Domain models for export options, definitions, content items and recipes.

Option and record types are Pydantic v2 models.  Types that carry live
XML elements (the export context and parsed recipes) are plain
dataclasses, since they hold ``ElementTree`` nodes that pydantic cannot
validate.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from enum import Flag, StrEnum, auto
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from sitecrate.document import ExportDocument


class VersionHistoryOptions(Flag):
    """Which versions of content items the caller asked for."""

    PUBLISHED = auto()
    DRAFT = auto()


class VersionOptions(StrEnum):
    """Version-selection policy applied to a content query."""

    DRAFT = "draft"
    PUBLISHED = "published"


class ExportOptions(BaseModel):
    """What an export should contain."""

    model_config = ConfigDict(frozen=True)

    export_metadata: bool = False
    export_site_settings: bool = False
    export_data: bool = False
    version_history_options: VersionHistoryOptions = VersionHistoryOptions.PUBLISHED


@dataclass
class ExportContext:
    """State shared with export event handlers for a single export call."""

    document: ExportDocument
    content_types: list[str]
    export_options: ExportOptions


# ── Content definitions ─────────────────────────────────────────


class PartDefinition(BaseModel):
    """A named, attachable fragment of a content type."""

    name: str
    settings: dict[str, str] = Field(default_factory=dict)


class TypePartDefinition(BaseModel):
    """A part as attached to a specific type, with per-type settings."""

    part_definition: PartDefinition
    settings: dict[str, str] = Field(default_factory=dict)


class TypeDefinition(BaseModel):
    """A content type and the ordered parts it is composed of."""

    name: str
    display_name: str = ""
    settings: dict[str, str] = Field(default_factory=dict)
    parts: list[TypePartDefinition] = Field(default_factory=list)


# ── Content items ───────────────────────────────────────────────


class ContentItem(BaseModel):
    """One version of a content record.

    ``identity`` is stable across versions and is what recipes use to
    match an imported item to an existing one.  ``parts`` maps part name
    to that part's attribute values.
    """

    id: int
    identity: str
    content_type: str
    version: int = 1
    published: bool = False
    latest: bool = True
    parts: dict[str, dict[str, Any]] = Field(default_factory=dict)


class User(BaseModel):
    """The acting principal."""

    user_name: str
    email: str = ""


# ── Shell descriptor ────────────────────────────────────────────


class ShellParameter(BaseModel):
    component: str
    name: str
    value: str = ""


class ShellDescriptor(BaseModel):
    """Versioned record of the enabled features and their parameters."""

    serial_number: int = 0
    features: list[str] = Field(default_factory=list)
    parameters: list[ShellParameter] = Field(default_factory=list)


# ── Recipes ─────────────────────────────────────────────────────


@dataclass
class RecipeStep:
    name: str
    step: ET.Element


@dataclass
class Recipe:
    """A parsed recipe: descriptive header plus ordered steps."""

    name: str = ""
    description: str = ""
    author: str = ""
    version: str = ""
    steps: list[RecipeStep] = field(default_factory=list)
