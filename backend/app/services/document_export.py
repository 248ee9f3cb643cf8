"""Export naming for task letter documents.

Only the file name and URL are derived here; rendering the PDF/DOCX body is
not implemented yet, so nothing is written to disk.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..config import settings


EXPORT_FORMATS: frozenset[str] = frozenset({"pdf", "docx"})
_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9-]")


@dataclass(frozen=True)
class ExportTarget:
    file_url: str
    filename: str


def sanitize_register_number(register_number: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("-", register_number)


def build_export_target(
    register_number: str,
    export_format: str,
    *,
    url_prefix: str | None = None,
    filename_prefix: str | None = None,
) -> ExportTarget:
    if export_format not in EXPORT_FORMATS:
        raise ValueError(f"Unsupported export format: {export_format}")

    if filename_prefix is None:
        filename_prefix = settings.EXPORT_FILENAME_PREFIX
    if url_prefix is None:
        url_prefix = settings.EXPORT_URL_PREFIX

    filename = f"{filename_prefix}{sanitize_register_number(register_number)}.{export_format}"
    return ExportTarget(file_url=f"{url_prefix.rstrip('/')}/{filename}", filename=filename)
