"""
File operation utilities
"""

import re
from pathlib import Path
from typing import List

IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.bmp', '.gif', '.tiff', '.webp'}

def natural_key(name: str) -> list:
    """Sort key that orders 'page2' before 'page10'"""
    return [int(part) if part.isdigit() else part.lower()
            for part in re.split(r'(\d+)', name)]

def is_image_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in IMAGE_EXTENSIONS

def get_image_files(directory: str, recursive: bool = False) -> List[str]:
    """Get all image files in directory, in natural reading order"""
    path = Path(directory)
    candidates = path.rglob('*') if recursive else path.glob('*')
    image_files = [f for f in candidates if is_image_file(f)]
    image_files.sort(key=lambda f: natural_key(str(f.relative_to(path))))
    return [str(f) for f in image_files]
