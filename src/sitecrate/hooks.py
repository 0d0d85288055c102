"""Export event handlers: third-party extension points around assembly."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from sitecrate.models import ExportContext

logger = logging.getLogger(__name__)


class ExportEventHandler:
    """Observer notified before and after the export sections are built.

    Both methods receive the shared ``ExportContext`` and may append
    elements to ``context.document``.  The defaults do nothing, so a
    handler only overrides the notification it cares about.
    """

    def exporting(self, context: ExportContext) -> None:
        """Called after the document skeleton exists, before any section."""

    def exported(self, context: ExportContext) -> None:
        """Called after every requested section, before the file is written."""


def invoke_handlers(
    handlers: Iterable[ExportEventHandler],
    dispatch: Callable[[ExportEventHandler], None],
    event: str = "",
) -> int:
    """Call ``dispatch`` for each handler in order, isolating failures.

    A handler that raises is logged and the remaining handlers still run.
    Returns the number of handlers that failed.
    """
    failures = 0
    for handler in handlers:
        try:
            dispatch(handler)
        except Exception:
            failures += 1
            logger.warning(
                "Export handler %s failed during %s",
                type(handler).__name__,
                event or "dispatch",
                exc_info=True,
            )
    return failures
