# gui/main_window.py

import logging
from PyQt6.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
                             QPushButton, QLabel, QFileDialog, QComboBox,
                             QMessageBox)
from PyQt6.QtGui import QKeySequence, QShortcut
from typing import Optional

from config import NavigatorConfig, ReaderConfig
from core.catalog import Catalog
from core.errors import ReaderError
from core.extraction import load_groups
from core.image_loader import ImageLoader, LoadedImage
from core.navigator import DisplayChange, Navigator
from gui.workers import LoadNotifier
from gui.widgets.image_viewer import ImageViewer
from gui.widgets.progress_widget import PageStatusWidget
from security.input_validation import ReferenceValidator
from utils.logging_config import log_operation

logger = logging.getLogger(__name__)

class ReaderWindow(QMainWindow):
    """
    Main reader window: one page at a time with previous/next controls
    """
    
    def __init__(self, config: ReaderConfig = None, loader: ImageLoader = None):
        super().__init__()
        self.config = config or ReaderConfig()
        self.loader = loader or ImageLoader(self.config.loader)
        self.navigator: Optional[Navigator] = None
        self.catalog: Optional[Catalog] = None
        
        self.notifier = LoadNotifier(self)
        self.notifier.image_loaded.connect(self.on_image_loaded)
        
        self.setWindowTitle("Comic Reader")
        self.resize(self.config.viewer.window_width, self.config.viewer.window_height)
        
        self.init_ui()
        self.init_shortcuts()
        self.update_controls()
    
    def init_ui(self):
        """Initialize user interface"""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        
        layout = QVBoxLayout(central_widget)
        
        # Top bar
        top_layout = QHBoxLayout()
        
        open_btn = QPushButton("Open Folder")
        open_btn.clicked.connect(self.select_directory)
        open_manifest_btn = QPushButton("Open Manifest")
        open_manifest_btn.clicked.connect(self.select_manifest)
        
        self.group_combo = QComboBox()
        self.group_combo.setMinimumWidth(250)
        self.group_combo.activated.connect(self.on_group_selected)
        
        self.metadata_label = QLabel("")
        self.metadata_label.setStyleSheet("color: #666;")
        
        top_layout.addWidget(open_btn)
        top_layout.addWidget(open_manifest_btn)
        top_layout.addWidget(self.group_combo)
        top_layout.addWidget(self.metadata_label)
        top_layout.addStretch()
        
        layout.addLayout(top_layout)
        
        # Page
        self.viewer = ImageViewer(fit_to_window=self.config.viewer.fit_to_window)
        self.viewer.show_message("Open a folder or manifest to start reading")
        layout.addWidget(self.viewer, stretch=1)
        
        # Navigation
        nav_layout = QHBoxLayout()
        
        self.prev_btn = QPushButton("◀ Previous")
        self.prev_btn.clicked.connect(self.show_previous)
        self.next_btn = QPushButton("Next ▶")
        self.next_btn.clicked.connect(self.show_next)
        self.next_btn.setStyleSheet("background-color: #2196F3; color: white; padding: 8px;")
        
        self.page_status = PageStatusWidget()
        
        nav_layout.addWidget(self.prev_btn)
        nav_layout.addWidget(self.page_status, stretch=1)
        nav_layout.addWidget(self.next_btn)
        
        layout.addLayout(nav_layout)
    
    def init_shortcuts(self):
        """Keyboard navigation"""
        bindings = [
            ("Right", self.show_next),
            ("Space", self.show_next),
            ("PgDown", self.show_next),
            ("Left", self.show_previous),
            ("PgUp", self.show_previous),
            ("Home", self.show_first),
            ("End", self.show_last),
        ]
        for key, slot in bindings:
            shortcut = QShortcut(QKeySequence(key), self)
            shortcut.activated.connect(slot)
    
    def select_directory(self):
        """Open a folder of images, one group per sub-folder"""
        dir_path = QFileDialog.getExistingDirectory(self, "Select Comic Folder")
        if dir_path:
            self.open_source(dir_path)
    
    def select_manifest(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            "Select Manifest",
            "",
            "Manifests (*.yaml *.yml *.json)"
        )
        if file_path:
            self.open_source(file_path)
    
    def open_source(self, source: str, start: Optional[int] = None) -> bool:
        """Build a catalog from source and start reading at start"""
        try:
            groups = load_groups(source)
        except (ReaderError, OSError) as e:
            logger.error("Could not open %s: %s", source, e)
            QMessageBox.critical(self, "Error", f"Could not open {source}:\n{e}")
            return False
        
        if self.config.loader.validate_references:
            groups = ReferenceValidator.filter_groups(groups)
        
        nav_config = self.config.navigator
        if start is not None:
            nav_config = NavigatorConfig(start=start,
                                         preload_quantity=nav_config.preload_quantity)
        
        if self.navigator is not None:
            self.navigator.unsubscribe(self.on_display_changed)
        
        self.catalog = Catalog.build(groups)
        self.navigator = Navigator.create(self.catalog, nav_config, self.loader.fetch)
        self.navigator.subscribe(self.on_display_changed)
        log_operation(logger, 'open', source=source,
                      groups=len(groups), pages=self.catalog.length())
        
        self.populate_groups()
        
        if self.catalog.length() == 0:
            self.viewer.show_message("No images found")
            self.page_status.set_status("No pages loaded")
            self.update_controls()
            return True
        
        self.navigator.show()
        return True
    
    def populate_groups(self):
        self.group_combo.clear()
        for group in self.catalog.groups:
            if len(group):
                self.group_combo.addItem(f"{group.title} ({len(group)})", group)
    
    # Navigation slots
    
    def show_next(self):
        if self.navigator is not None:
            self.navigator.next()
    
    def show_previous(self):
        if self.navigator is not None:
            self.navigator.previous()
    
    def show_first(self):
        if self.navigator is not None and self.navigator.length():
            self.navigator.jump_to(0)
    
    def show_last(self):
        if self.navigator is not None and self.navigator.length():
            self.navigator.jump_to(self.navigator.length() - 1)
    
    def on_group_selected(self, combo_index: int):
        group = self.group_combo.itemData(combo_index)
        if group is not None and self.navigator is not None:
            self.navigator.jump_to(self.catalog.first_index_of(group))
    
    # Rendering
    
    def on_display_changed(self, change: DisplayChange):
        """Render the newly current page and its group metadata"""
        self.page_status.set_page(change.index, self.navigator.length(), change.group.title)
        self.metadata_label.setText(
            ", ".join(f"{key}: {value}" for key, value in change.group.metadata.items())
        )
        
        # findData cannot compare Python objects by identity
        combo_index = next((i for i in range(self.group_combo.count())
                            if self.group_combo.itemData(i) is change.group), -1)
        if combo_index >= 0:
            self.group_combo.blockSignals(True)
            self.group_combo.setCurrentIndex(combo_index)
            self.group_combo.blockSignals(False)
        
        self.render_image(change.image)
        self.update_controls()
    
    def render_image(self, handle: LoadedImage):
        if handle.is_ready:
            self.viewer.show_image(handle.image)
        elif handle.failed:
            self.viewer.show_message(f"Could not load {handle.ref.source}\n{handle.error}")
        else:
            self.viewer.show_message("Loading...")
            self.notifier.watch(handle)
    
    def on_image_loaded(self, handle: LoadedImage):
        # Only redraw if the user is still on that page
        if self.navigator is not None and self.navigator.length():
            if self.navigator.current_image() is handle:
                self.render_image(handle)
    
    def update_controls(self):
        has_navigator = self.navigator is not None
        self.prev_btn.setEnabled(has_navigator and self.navigator.has_previous())
        self.next_btn.setEnabled(has_navigator and self.navigator.has_next())
        self.group_combo.setEnabled(has_navigator and self.group_combo.count() > 0)
    
    def closeEvent(self, event):
        self.loader.shutdown(wait=False)
        super().closeEvent(event)
