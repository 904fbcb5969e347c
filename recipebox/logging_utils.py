"""
logging_utils.py

Central logging utilities for recipebox.

Log format (one line):
<RunId>|<Date>|<Time>|<Level>|<File:Line>|<Module.Func>|<ModulePurpose>|<Detail>|<END>
"""

from __future__ import annotations

import datetime
import logging
import uuid
from typing import Dict

from .config import settings

RUN_ID: str = uuid.uuid4().hex[:8]


class StructuredFormatter(logging.Formatter):
    """
    Formatter that emits a single '|' separated line per record.
    """

    # High-level purposes by module name
    MODULE_PURPOSES: Dict[str, str] = {
        "extract": "Find JSON-LD blocks embedded in recipe pages",
        "locate": "Pick the Recipe node out of extracted JSON-LD documents",
        "normalize": "Map a schema.org Recipe node to the canonical record",
        "fetch": "Fetch recipe pages and images over HTTP",
        "images": "Store recipe images on disk keyed by recipe id",
        "importer": "Run the URL import pipeline",
        "duplicates": "Reconcile imported recipes with stored ones",
        "crud": "Persist and look up recipes",
        "app": "HTTP API over the recipe store and importer",
        "main": "Command-line recipe import",
        "import_data": "Batch import recipe URLs",
    }

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        dt = datetime.datetime.fromtimestamp(record.created)
        date_str = dt.strftime("%Y-%m-%d")
        time_str = dt.strftime("%H:%M:%S")

        run_id = getattr(record, "run_id", RUN_ID)
        code_location = f"{record.filename}:{record.lineno}"
        module_purpose = self.MODULE_PURPOSES.get(record.module, "")

        line = (
            f"{run_id}|{date_str}|{time_str}|{record.levelname}|{code_location}|"
            f"{record.module}.{record.funcName}|{module_purpose}|"
            f"{record.getMessage()}|<END>"
        )
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def init_logging(level: str | int | None = None) -> None:
    """
    Initialize the recipebox logger once with StructuredFormatter.

    Call get_logger() from modules instead of configuring logging in each
    one, so configuration stays central.
    """
    root = logging.getLogger("recipebox")
    if root.handlers:
        # Already configured, avoid double handlers in REPL / notebooks
        return

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    root.addHandler(handler)
    root.setLevel(level or settings.log_level.upper())


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger under the "recipebox" hierarchy.

    Usage:
        logger = get_logger(__name__)
        logger.info("Found %d JSON-LD blocks", count)
    """
    init_logging()
    if not name.startswith("recipebox"):
        name = f"recipebox.{name}"
    return logging.getLogger(name)
