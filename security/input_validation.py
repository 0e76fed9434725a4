# security/input_validation.py

import logging
from pathlib import Path
from typing import List, Sequence
from urllib.parse import urlparse

import magic

from core.catalog import Group
from utils.file_utils import IMAGE_EXTENSIONS

logger = logging.getLogger(__name__)

class ReferenceValidator:
    """
    Validate image references before they enter a catalog
    """
    
    ALLOWED_EXTENSIONS = IMAGE_EXTENSIONS
    ALLOWED_SCHEMES = {'http', 'https'}
    MAX_FILE_SIZE = 50 * 1024 * 1024  # 50 MB
    
    @staticmethod
    def validate_url(source: str) -> bool:
        """Only absolute http(s) URLs with a host are accepted"""
        parsed = urlparse(source)
        return parsed.scheme in ReferenceValidator.ALLOWED_SCHEMES and bool(parsed.netloc)
    
    @staticmethod
    def validate_image_path(path: str) -> bool:
        """
        Validate a local image path
        """
        try:
            path_obj = Path(path).resolve()
        except (OSError, RuntimeError) as e:
            logger.warning("Validation error for %s: %s", path, e)
            return False
        
        # Ensure file exists and is a file (not directory)
        if not path_obj.is_file():
            return False
        
        # Check extension
        if path_obj.suffix.lower() not in ReferenceValidator.ALLOWED_EXTENSIONS:
            return False
        
        # Check file size
        if path_obj.stat().st_size > ReferenceValidator.MAX_FILE_SIZE:
            return False
        
        # Verify actual file type (not just extension)
        mime = magic.from_file(str(path_obj), mime=True)
        return mime.startswith('image/')
    
    @classmethod
    def validate_source(cls, source: str) -> bool:
        if '://' in source:
            return cls.validate_url(source)
        return cls.validate_image_path(source)
    
    @classmethod
    def invalid_sources(cls, groups: Sequence[Group]) -> List[str]:
        """Every source across groups that fails validation, in order"""
        return [source for group in groups for source in group.images
                if not cls.validate_source(source)]
    
    @classmethod
    def filter_groups(cls, groups: Sequence[Group]) -> List[Group]:
        """
        Drop invalid references from each group.

        Groups keep their title and metadata even if every image is dropped.
        """
        filtered = []
        for group in groups:
            valid = [source for source in group.images if cls.validate_source(source)]
            dropped = len(group.images) - len(valid)
            if dropped:
                logger.warning("Dropped %d invalid reference(s) from '%s'",
                               dropped, group.title)
                group = Group(title=group.title, images=valid, metadata=group.metadata)
            filtered.append(group)
        return filtered
