"""
Reading progress widget with page status
"""

from PyQt6.QtWidgets import QWidget, QVBoxLayout, QProgressBar, QLabel
from PyQt6.QtCore import Qt

class PageStatusWidget(QWidget):
    """Page counter, group title and a reading progress bar"""
    
    def __init__(self):
        super().__init__()
        layout = QVBoxLayout(self)
        
        self.status_label = QLabel("No pages loaded")
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.progress_bar = QProgressBar()
        self.progress_bar.setTextVisible(False)
        
        layout.addWidget(self.status_label)
        layout.addWidget(self.progress_bar)
        
    def set_page(self, index: int, total: int, title: str = ""):
        """Show 'Page n / total' for a zero-based index"""
        text = f"Page {index + 1} / {total}"
        if title:
            text = f"{title} - {text}"
        self.status_label.setText(text)
        self.progress_bar.setRange(0, max(total, 1))
        self.progress_bar.setValue(index + 1)
    
    def set_status(self, text: str):
        """Update status text"""
        self.status_label.setText(text)
