"""
File inputs (FILE_INPUT) and download buttons (DOWNLOAD).

Downloads are captured through Playwright's download event and saved into
the button's ``download_dir`` setting (default ``~/Downloads``).
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from loguru import logger

from ..element import Capability, Element, require
from ..element_types import DEFAULT_DOWNLOAD_TIMEOUT_SECONDS
from ..session import SessionContext
from ..wait import poll_until, wait_until


DOWNLOAD_POLL_INTERVAL_MS = 500

PathLike = Union[str, Path]


# =========================================================================
# Upload
# =========================================================================

def _existing_file(path: PathLike) -> Path:
    file_path = Path(path).expanduser()
    if not file_path.is_file():
        raise ValueError(f"File not found: {file_path}")
    return file_path.resolve()


def upload_file(upload: Element, ctx: SessionContext, path: PathLike) -> Element:
    """
    Attach one file to the input.

    Raises:
        ValueError: If ``path`` is not an existing file
    """
    require(upload, Capability.FILE_INPUT, "upload_file")
    file_path = _existing_file(path)
    upload.perform(
        ctx, f"Upload file '{file_path.name}'",
        lambda loc: loc.set_input_files(str(file_path)),
        "exist",
    )
    return upload


def upload_files(upload: Element, ctx: SessionContext, paths: Sequence[PathLike]) -> Element:
    """Attach several files at once (input must accept ``multiple``)."""
    require(upload, Capability.FILE_INPUT, "upload_files")
    file_paths = [str(_existing_file(path)) for path in paths]
    upload.perform(
        ctx, f"Upload {len(file_paths)} files",
        lambda loc: loc.set_input_files(file_paths),
        "exist",
    )
    return upload


def get_uploaded_file_name(upload: Element, ctx: SessionContext) -> str:
    """Base name of the selected file (browsers report "C:\\fakepath\\name")."""
    require(upload, Capability.FILE_INPUT, "get_uploaded_file_name")
    value = upload.get_value(ctx)
    return re.split(r"[\\/]", value)[-1] if value else ""


# =========================================================================
# Download
# =========================================================================

def get_download_path(btn: Element) -> Path:
    require(btn, Capability.DOWNLOAD, "get_download_path")
    return Path(btn.settings.get("download_dir") or Path.home() / "Downloads").expanduser()


def get_downloaded_file_path(btn: Element, file_name: str) -> Path:
    return get_download_path(btn) / file_name


def _timeout_ms(btn: Element, timeout_seconds: Optional[float] = None) -> int:
    seconds = timeout_seconds or btn.settings.get("timeout_seconds") or DEFAULT_DOWNLOAD_TIMEOUT_SECONDS
    return int(seconds * 1000)


def _click_and_save(btn: Element, ctx: SessionContext, file_name: Optional[str]) -> Path:
    directory = get_download_path(btn)
    directory.mkdir(parents=True, exist_ok=True)
    timeout_ms = _timeout_ms(btn)

    def operation(loc) -> Path:
        with ctx.page.expect_download(timeout=timeout_ms) as download_info:
            loc.click()
        download = download_info.value
        target = directory / (file_name or download.suggested_filename)
        download.save_as(str(target))
        return target

    return btn.perform(ctx, "Download", operation)


def download(btn: Element, ctx: SessionContext, expected_name: Optional[str] = None) -> Path:
    """
    Click the button and save the resulting download.

    Args:
        expected_name: File name to save as; an existing file with that name
            is removed first. Defaults to the name suggested by the site.

    Returns:
        Path of the saved file
    """
    require(btn, Capability.DOWNLOAD, "download")
    if expected_name:
        existing = get_downloaded_file_path(btn, expected_name)
        if existing.exists():
            logger.debug(f"Removing previous download: {existing}")
            existing.unlink()

    path = _click_and_save(btn, ctx, expected_name)
    if not wait_for_download(btn, path.name):
        raise FileNotFoundError(f"Download did not appear: {path}")
    logger.info(f"{btn} - downloaded {path}")
    return path


def _matching_files(directory: Path, predicate: Callable[[str], bool]) -> List[Path]:
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.is_file() and predicate(p.name))


def download_with_pattern(
    btn: Element,
    ctx: SessionContext,
    predicate: Callable[[str], bool],
) -> Path:
    """
    Click the button, then poll the download directory every 500ms for a file
    whose name satisfies ``predicate``.

    Raises:
        WaitTimeoutError: If no matching file appears in time
    """
    require(btn, Capability.DOWNLOAD, "download_with_pattern")
    directory = get_download_path(btn)
    _click_and_save(btn, ctx, None)

    poll_until(
        lambda: bool(_matching_files(directory, predicate)),
        _timeout_ms(btn),
        interval_ms=DOWNLOAD_POLL_INTERVAL_MS,
        description="downloaded file matching pattern",
        target=str(btn),
    )
    path = _matching_files(directory, predicate)[0]
    logger.info(f"{btn} - downloaded {path}")
    return path


def wait_for_download(
    btn: Element,
    file_name: str,
    timeout_seconds: Optional[float] = None,
) -> bool:
    """True once ``file_name`` exists in the download directory."""
    require(btn, Capability.DOWNLOAD, "wait_for_download")
    path = get_downloaded_file_path(btn, file_name)
    return wait_until(
        path.exists,
        _timeout_ms(btn, timeout_seconds),
        interval_ms=DOWNLOAD_POLL_INTERVAL_MS,
        description=f"download {path}",
    )


__all__ = [
    "upload_file",
    "upload_files",
    "get_uploaded_file_name",
    "get_download_path",
    "get_downloaded_file_path",
    "download",
    "download_with_pattern",
    "wait_for_download",
]
