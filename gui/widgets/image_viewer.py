"""
Image viewer widget
"""

import numpy as np
from PyQt6.QtWidgets import QLabel, QSizePolicy
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QImage, QPixmap

from utils.image_utils import bgr_to_rgb

class ImageViewer(QLabel):
    """Shows one decoded page, scaled to fit the widget"""
    
    def __init__(self, fit_to_window: bool = True):
        super().__init__()
        self.fit_to_window = fit_to_window
        self._pixmap = None
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setScaledContents(False)
        self.setMinimumSize(200, 200)
        self.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Ignored)
        
    def show_image(self, image: np.ndarray):
        """Display an OpenCV BGR image"""
        rgb = bgr_to_rgb(image)
        h, w = rgb.shape[:2]
        qimage = QImage(rgb.data, w, h, 3 * w, QImage.Format.Format_RGB888)
        # copy() detaches the QImage from the numpy buffer
        self._pixmap = QPixmap.fromImage(qimage.copy())
        self._render()
    
    def show_message(self, text: str):
        """Replace the image with a text placeholder"""
        self._pixmap = None
        self.clear()
        self.setText(text)
    
    def _render(self):
        if self._pixmap is None:
            return
        if self.fit_to_window:
            self.setPixmap(self._pixmap.scaled(
                self.size(),
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation
            ))
        else:
            self.setPixmap(self._pixmap)
    
    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._render()
