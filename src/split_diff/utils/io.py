from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .error_handling import log_file_error
from .logger import log


@dataclass
class FileReadResult:
    """Result of loading a file into a pane."""
    success: bool
    content: str = ""
    encoding: str = ""
    error_message: str = ""


DEFAULT_ENCODINGS: tuple[str, ...] = (
    "utf-8",
    "utf-8-sig",
    "cp1252",
    "latin-1",
)


def read_text(path: str, encodings: Iterable[str] = DEFAULT_ENCODINGS, ignore_on_last: bool = True) -> tuple[str, str]:
    """
    Read a text file trying multiple encodings in order.

    Returns (text, used_encoding).
    If all strict attempts fail and ignore_on_last is True, retries the last
    encoding with errors="ignore" and logs a warning.

    Raises:
        OSError: If the file cannot be opened at all
    """
    last_enc = None
    for enc in encodings:
        last_enc = enc
        try:
            # newline="" keeps \r\n intact; the line splitter normalizes it
            with open(path, encoding=enc, errors="strict", newline="") as f:
                return f.read(), enc
        except UnicodeDecodeError:
            continue
    if ignore_on_last and last_enc:
        with open(path, encoding=last_enc, errors="ignore", newline="") as f:
            log.warning(f"[IO] Decoded with ignore: {path} ({last_enc})")
            return f.read(), f"{last_enc}+ignore"
    return ("", last_enc or "")


def safe_read_file(file_path: str | None) -> FileReadResult:
    """Read a file for a pane, reporting failure in the result instead of raising.

    Args:
        file_path: Path to the file to read

    Returns:
        FileReadResult with success status, content, and error details
    """
    if not file_path:
        return FileReadResult(success=False, error_message="No file path provided")

    try:
        content, encoding = read_text(file_path)
    except OSError as e:
        log_file_error(file_path, "reading", e)
        return FileReadResult(success=False, error_message=f"Error reading {file_path}: {e}")

    log.debug(f"[IO] Read {len(content)} chars from {file_path} ({encoding})")
    return FileReadResult(success=True, content=content, encoding=encoding)
