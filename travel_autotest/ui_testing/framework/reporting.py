"""
================================================================================
Allure Attachments
================================================================================

Helpers attaching evidence to the running Allure test: page state on
failure, screenshots, structured data such as fallback outcomes.

================================================================================
"""

import json
from pathlib import Path
from typing import Any, Union

import allure
from loguru import logger


def attach_json(data: Any, name: str = "Data"):
    """
    Attach JSON data to Allure report.

    Args:
        data: Data to attach (will be JSON serialized)
        name: Attachment name
    """
    allure.attach(
        json.dumps(data, indent=2, default=str),
        name=name,
        attachment_type=allure.attachment_type.JSON,
    )


def attach_text(text: str, name: str = "Text"):
    allure.attach(text, name=name, attachment_type=allure.attachment_type.TEXT)


def attach_html(html: str, name: str = "Page Source"):
    allure.attach(html, name=name, attachment_type=allure.attachment_type.HTML)


def attach_png(source: Union[bytes, str, Path], name: str = "Screenshot"):
    """
    Attach a PNG image, given as raw bytes or as a file path.

    Args:
        source: PNG bytes or path to a saved screenshot
        name: Attachment name
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            logger.warning(f"Screenshot not found, nothing attached: {path}")
            return
        source = path.read_bytes()
    allure.attach(source, name=name, attachment_type=allure.attachment_type.PNG)


__all__ = ["attach_json", "attach_text", "attach_html", "attach_png"]
