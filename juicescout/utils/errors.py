"""
Structured logging helpers and exception types for the migration.

The :mod:`juicescout.utils.errors` module centralizes the writing of log
entries for both failed and successful operations during the migration.
Each entry is appended to a JSON Lines file under ``reports/migration`` so
that the information can be reviewed or parsed after a run.

Three public functions are provided:

``report_error``
    Record an error that occurred for a category or article.  Optional extra
    fields (such as the API response body) can be attached to the entry.

``report_warning``
    Record a problem that does not fail the item, such as a category with
    no counterpart.  It is written to the same file as errors.

``report_ok``
    Record a successful step for a category or article.

The ``ERRORS`` dictionary maps error or event codes to human readable
messages.  Codes not present in the dictionary fall back to the code itself.

The exception classes at the bottom of the module are the errors the tool
raises on purpose.  Everything derives from :class:`MigrationError` so the
command line front end can stop the run with a single ``except`` clause.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

# Mapping of event codes used throughout the migration to descriptive messages.
# The keys include both error and success codes as the same lookup is used by
# :func:`report_error` and :func:`report_ok`.
ERRORS: Dict[str, str] = {
    "CATEGORY_CREATED": "Category created on HelpScout",
    "CATEGORY_CREATE_FAILED": "HelpScout rejected the category",
    "CATEGORY_UNMAPPED": "HelpScout category has no matching HelpJuice category",
    "ARTICLE_CREATED": "Article created on HelpScout",
    "ARTICLE_CREATE_FAILED": "HelpScout rejected the article",
    "ARTICLE_UNCATEGORIZED": "Article has no HelpScout category",
    "FATAL_PAYLOAD": "HelpScout could not read the request payload",
}

_REPORT_DIR = os.path.join("reports", "migration")


def set_report_dir(path: str) -> None:
    """Point the JSON Lines reports at ``path`` instead of ``reports/migration``."""
    global _REPORT_DIR
    _REPORT_DIR = path


def _write_jsonl(filename: str, data: Dict[str, Any]) -> None:
    """Append ``data`` as a JSON object followed by a newline to ``filename``."""
    os.makedirs(_REPORT_DIR, exist_ok=True)
    with open(os.path.join(_REPORT_DIR, filename), "a", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)
        f.write("\n")


def _entry(code: str, item: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "code": code,
        "message": ERRORS.get(code, code),
        "kind": item.get("kind"),
        "name": item.get("name"),
        "source": item.get("source"),
    }


def _report(
    level: str, filename: str, code: str, item: Dict[str, Any], extra: Optional[Dict[str, Any]]
) -> None:
    entry = _entry(code, item)
    if extra:
        entry.update(extra)
    print(f"[{level}] {entry['message']} - {item.get('name', '')}")
    _write_jsonl(filename, entry)


def report_error(code: str, item: Dict[str, Any], extra: Optional[Dict[str, Any]] = None) -> None:
    """Log an error event for ``item``.

    Parameters
    ----------
    code:
        A key identifying the type of error.  If ``code`` is present in
        :data:`ERRORS` its value will be used as the message.
    item:
        Dictionary describing the category or article.  Only the ``kind``,
        ``name`` and ``source`` keys are referenced if present.
    extra:
        Optional dictionary of additional fields, typically ``status`` and
        ``response`` from the API.
    """
    _report("ERROR", "errors.jsonl", code, item, extra)


def report_warning(code: str, item: Dict[str, Any], extra: Optional[Dict[str, Any]] = None) -> None:
    """Like :func:`report_error`, for problems that do not fail the item."""
    _report("WARNING", "errors.jsonl", code, item, extra)


def report_ok(code: str, item: Dict[str, Any], extra: Optional[Dict[str, Any]] = None) -> None:
    """Log a successful event for ``item``.

    Parameters
    ----------
    code:
        A key identifying the type of event.
    item:
        Dictionary describing the category or article.
    extra:
        Optional dictionary of additional fields to merge into the log entry.
    """
    _report("OK", "success.jsonl", code, item, extra)


class MigrationError(Exception):
    """Base class for errors that stop a migration run."""


class RecordFormatError(MigrationError, ValueError):
    """An export file could not be read as delimited text."""


class PreFlightCheckError(MigrationError):
    """Configuration or input files are not usable."""


class TransportError(MigrationError):
    """HelpScout could not be reached."""


class APIError(MigrationError):
    """HelpScout answered with a response the migration cannot work with."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class FatalPayloadError(APIError):
    """HelpScout could not parse the request itself.

    Every later request would be built the same way, so the run stops here.
    ``payload`` holds the serialized request body that was rejected.
    """

    def __init__(self, message: str, status_code: int, body: str, payload: str) -> None:
        super().__init__(message, status_code, body)
        self.payload = payload
