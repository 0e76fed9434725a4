# tests/test_main_window.py

import os
from concurrent.futures import Future

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import cv2
import numpy as np
import pytest
from PyQt6.QtWidgets import QApplication
from config import ReaderConfig
from core.image_loader import LoadedImage
from gui.main_window import ReaderWindow


class ManualLoader:
    """Loader whose futures are completed by the test"""
    
    def __init__(self):
        self.futures = {}
    
    def fetch(self, ref):
        future = Future()
        self.futures[ref.source] = future
        return LoadedImage(ref, future)
    
    def shutdown(self, wait=True):
        pass


@pytest.fixture(scope="module")
def qapp():
    return QApplication.instance() or QApplication([])

@pytest.fixture
def comic_dir(tmp_path):
    root = tmp_path / "comic"
    for chapter in ("ch1", "ch2"):
        (root / chapter).mkdir(parents=True)
        for i in range(2):
            cv2.imwrite(str(root / chapter / f"{i}.png"),
                        np.zeros((8, 8, 3), dtype=np.uint8))
    return root

@pytest.fixture
def window(qapp, tmp_path):
    config = ReaderConfig(log_dir=str(tmp_path / "logs"))
    reader = ReaderWindow(config, loader=ManualLoader())
    reader.show()
    yield reader
    reader.close()

def page_image():
    return np.full((40, 30, 3), 255, dtype=np.uint8)

def test_pending_page_is_rendered_once_loaded(window, comic_dir):
    assert window.open_source(str(comic_dir))
    
    assert window.viewer.text() == "Loading..."
    assert window.page_status.status_label.text() == "ch1 - Page 1 / 4"
    
    current = window.navigator.current_image()
    window.loader.futures[current.ref.source].set_result(page_image())
    
    assert window.viewer.pixmap() is not None
    assert not window.viewer.pixmap().isNull()

def test_late_load_of_other_page_is_ignored(window, comic_dir):
    window.open_source(str(comic_dir))
    first = window.navigator.current_image()
    window.show_next()
    
    window.loader.futures[first.ref.source].set_result(page_image())
    
    assert window.viewer.text() == "Loading..."

def test_failed_load_shows_message(window, comic_dir):
    window.open_source(str(comic_dir))
    current = window.navigator.current_image()
    
    window.loader.futures[current.ref.source].set_exception(OSError("unreadable"))
    
    assert "Could not load" in window.viewer.text()
    assert "unreadable" in window.viewer.text()

def test_controls_follow_position(window, comic_dir):
    window.open_source(str(comic_dir))
    
    assert not window.prev_btn.isEnabled()
    assert window.next_btn.isEnabled()
    
    window.show_last()
    
    assert window.navigator.current_index == 3
    assert window.prev_btn.isEnabled()
    assert not window.next_btn.isEnabled()
    assert window.group_combo.currentText() == "ch2 (2)"

def test_group_selection_jumps_to_first_page(window, comic_dir):
    window.open_source(str(comic_dir))
    
    window.on_group_selected(1)
    
    assert window.navigator.current_index == 2
    assert window.navigator.current_element().title == "ch2"
