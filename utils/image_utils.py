"""
Image utility functions
"""

import cv2
import numpy as np
from typing import Optional, Tuple

def decode_image(data: bytes) -> Optional[np.ndarray]:
    """Decode an encoded image (jpg, png, ...) held in memory"""
    buffer = np.frombuffer(data, dtype=np.uint8)
    if buffer.size == 0:
        return None
    return cv2.imdecode(buffer, cv2.IMREAD_COLOR)

def limit_dimension(image: np.ndarray, max_dimension: int) -> np.ndarray:
    """Downscale so the longest side is at most max_dimension"""
    h, w = image.shape[:2]
    if max_dimension <= 0 or max(h, w) <= max_dimension:
        return image
    return resize_maintain_aspect(image, (max_dimension, max_dimension))

def resize_maintain_aspect(image: np.ndarray, 
                          target_size: Tuple[int, int]) -> np.ndarray:
    """Resize image maintaining aspect ratio"""
    h, w = image.shape[:2]
    target_w, target_h = target_size
    
    scale = min(target_w / w, target_h / h)
    new_w = max(1, int(w * scale))
    new_h = max(1, int(h * scale))
    
    return cv2.resize(image, (new_w, new_h), interpolation=cv2.INTER_AREA)

def bgr_to_rgb(image: np.ndarray) -> np.ndarray:
    """Convert an OpenCV BGR image to contiguous RGB for display"""
    if image.ndim == 2:
        return np.ascontiguousarray(cv2.cvtColor(image, cv2.COLOR_GRAY2RGB))
    return np.ascontiguousarray(cv2.cvtColor(image, cv2.COLOR_BGR2RGB))
