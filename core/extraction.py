# core/extraction.py

import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional

import yaml

from core.catalog import Group
from core.errors import ManifestError
from utils.file_utils import get_image_files, is_image_file, natural_key

logger = logging.getLogger(__name__)

MANIFEST_SUFFIXES = {'.yaml', '.yml', '.json'}


def groups_from_document(document: Mapping[str, Any],
                         base_dir: Optional[Path] = None) -> List[Group]:
    """
    Build groups from a parsed manifest.

    Expected layout::

        title: My Comic
        pages:
          - title: Chapter 1
            metadata: {author: ...}
            images:
              - 001.png
              - https://example.com/002.png

    Relative local paths are resolved against base_dir when given.
    """
    if not isinstance(document, Mapping):
        raise ManifestError("Manifest must be a mapping with a 'pages' list")
    
    pages = document.get('pages')
    if not isinstance(pages, list):
        raise ManifestError("Manifest must contain a 'pages' list")
    
    groups = []
    for number, page in enumerate(pages, 1):
        if not isinstance(page, Mapping):
            raise ManifestError(f"Page {number} must be a mapping")
        
        images = page.get('images') or []
        if not isinstance(images, list):
            raise ManifestError(f"Page {number}: 'images' must be a list")
        
        metadata = page.get('metadata') or {}
        if not isinstance(metadata, Mapping):
            raise ManifestError(f"Page {number}: 'metadata' must be a mapping")
        
        groups.append(Group(
            title=str(page.get('title', f"Page {number}")),
            images=[_resolve(str(source), base_dir) for source in images],
            metadata=dict(metadata)
        ))
    
    return groups


def _resolve(source: str, base_dir: Optional[Path]) -> str:
    if base_dir is None or source.startswith(('http://', 'https://')):
        return source
    path = Path(source).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return str(path)


def load_manifest(path: str) -> List[Group]:
    """Read a YAML or JSON manifest file into groups"""
    manifest_path = Path(path)
    
    try:
        with open(manifest_path, 'r', encoding='utf-8') as f:
            document = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise ManifestError(f"Could not parse {manifest_path}: {e}") from e
    
    groups = groups_from_document(document or {}, base_dir=manifest_path.parent)
    logger.info("Loaded %d groups from manifest %s", len(groups), manifest_path)
    return groups


def groups_from_directory(directory: str) -> List[Group]:
    """
    Treat each sub-directory as one group.

    Images lying directly in the directory form a leading group named
    after the directory itself. Empty sub-directories are skipped.
    """
    root = Path(directory)
    groups = []
    
    loose = get_image_files(str(root))
    if loose:
        groups.append(Group(title=root.name, images=loose,
                            metadata={'path': str(root)}))
    
    subdirs = sorted((d for d in root.iterdir() if d.is_dir()),
                     key=lambda d: natural_key(d.name))
    for subdir in subdirs:
        images = get_image_files(str(subdir), recursive=True)
        if not images:
            continue
        groups.append(Group(title=subdir.name, images=images,
                            metadata={'path': str(subdir)}))
    
    logger.info("Found %d groups in %s", len(groups), root)
    return groups


def load_groups(source: str) -> List[Group]:
    """Load groups from a manifest file, a directory, or a single image"""
    path = Path(source)
    
    if path.is_dir():
        return groups_from_directory(str(path))
    
    if path.is_file() and path.suffix.lower() in MANIFEST_SUFFIXES:
        return load_manifest(str(path))
    
    if is_image_file(path):
        return [Group(title=path.stem, images=[str(path)])]
    
    raise ManifestError(f"Unsupported source: {source}")
