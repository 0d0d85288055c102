"""Recipe-driven export and import of site content.

Exports content type metadata, site settings and content items into a
single XML recipe, and replays recipes back into a site.
"""

from sitecrate.document import ExportDocument, create_export_root
from sitecrate.errors import (
    CallerIdentityError,
    RecipeExecutionError,
    RecipeParseError,
    ShellDescriptorError,
    SiteCrateError,
    StorageError,
)
from sitecrate.hooks import ExportEventHandler
from sitecrate.models import (
    ExportContext,
    ExportOptions,
    VersionHistoryOptions,
    VersionOptions,
)
from sitecrate.service import ImportExportService

__version__ = "0.1.0"

__all__ = [
    "CallerIdentityError",
    "ExportContext",
    "ExportDocument",
    "ExportEventHandler",
    "ExportOptions",
    "ImportExportService",
    "RecipeExecutionError",
    "RecipeParseError",
    "ShellDescriptorError",
    "SiteCrateError",
    "StorageError",
    "VersionHistoryOptions",
    "VersionOptions",
    "__version__",
]
