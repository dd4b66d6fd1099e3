"""Read and write the on-disk template layout.

Each template lives in its own folder holding a metadata file and optional
HTML/text bodies::

    templates/
        welcome/
            meta.json
            content.html
            content.txt
        _layouts/
            basic/
                meta.json
                content.html
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from ..config import Settings, get_settings
from ..errors import DirectoryNotFoundError
from ..models import TemplateRecord, record_from_dict

logger = logging.getLogger(__name__)


def validate_templates_dir(root_path: Union[str, Path]) -> Path:
    path = Path(root_path).expanduser()
    if not path.exists():
        raise DirectoryNotFoundError(f"Could not find directory: {path}")
    if not path.is_dir():
        raise NotADirectoryError(f"Not a directory: {path}")
    return path


def find_metadata_files(root: Path, metadata_file: str) -> Iterable[Path]:
    """Yield metadata files under root in sorted traversal order."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        if metadata_file in filenames:
            yield Path(dirpath) / metadata_file


def _read_optional(path: Path) -> str:
    if not path.is_file():
        return ""
    return path.read_text(encoding="utf-8")


def read_template_folder(
    meta_path: Path, settings: Optional[Settings] = None
) -> TemplateRecord:
    """Merge a metadata file with its sibling body files into one record.

    Raises ValueError for unreadable or invalid metadata.
    """
    settings = settings or get_settings()
    folder = meta_path.parent

    with meta_path.open("r", encoding="utf-8") as f:
        meta = json.load(f)
    if not isinstance(meta, dict):
        raise ValueError("metadata must be a JSON object")

    data: Dict[str, Any] = {
        "HtmlBody": _read_optional(folder / settings["html_file"]),
        "TextBody": _read_optional(folder / settings["text_file"]),
    }
    data.update(meta)
    return record_from_dict(data)


def build_manifest(
    root_path: Union[str, Path], settings: Optional[Settings] = None
) -> List[TemplateRecord]:
    """Collect every template and layout found under root_path.

    Folders whose metadata cannot be parsed are skipped with a warning.
    """
    settings = settings or get_settings()
    root = validate_templates_dir(root_path)

    manifest: List[TemplateRecord] = []
    for meta_path in find_metadata_files(root, settings["metadata_file"]):
        try:
            record = read_template_folder(meta_path, settings)
        except (OSError, ValueError) as exc:
            # json.JSONDecodeError is a ValueError
            logger.warning("Skipping %s: %s", meta_path.parent, exc)
            continue
        manifest.append(record)

    logger.debug("Found %d template(s) under %s", len(manifest), root)
    return manifest


def template_folder(
    output_dir: Path, record: TemplateRecord, settings: Optional[Settings] = None
) -> Path:
    settings = settings or get_settings()
    base = output_dir / settings["layouts_dir"] if record.is_layout else output_dir
    return base / (record.alias or "")


def write_template(
    output_dir: Union[str, Path],
    record: TemplateRecord,
    settings: Optional[Settings] = None,
) -> Path:
    """Write one record into the folder layout read by build_manifest.

    Returns the template folder.
    """
    settings = settings or get_settings()
    if not record.alias:
        raise ValueError(f"Template {record.name!r} has no alias")

    folder = template_folder(Path(output_dir).expanduser(), record, settings)
    folder.mkdir(parents=True, exist_ok=True)

    for filename, body in (
        (settings["html_file"], record.html_body),
        (settings["text_file"], record.text_body),
    ):
        body_path = folder / filename
        if body:
            body_path.write_text(body, encoding="utf-8")
        elif body_path.exists():
            # stale body from an earlier pull
            body_path.unlink()

    with (folder / settings["metadata_file"]).open("w", encoding="utf-8") as f:
        json.dump(record.to_meta(), f, indent=2)
        f.write("\n")
    return folder
