# tests/test_input_validation.py

import cv2
import numpy as np
import pytest
from core.catalog import Group
from security.input_validation import ReferenceValidator

@pytest.fixture
def image_path(tmp_path):
    path = tmp_path / "page.png"
    cv2.imwrite(str(path), np.zeros((8, 8, 3), dtype=np.uint8))
    return str(path)

@pytest.mark.parametrize("url,expected", [
    ("https://example.com/a.png", True),
    ("http://example.com/a.png", True),
    ("ftp://example.com/a.png", False),
    ("file:///etc/passwd", False),
    ("https://", False),
])
def test_validate_url(url, expected):
    assert ReferenceValidator.validate_url(url) is expected

def test_rejects_missing_and_wrong_extension(tmp_path):
    text_file = tmp_path / "notes.txt"
    text_file.write_text("hello")
    
    assert not ReferenceValidator.validate_image_path(str(tmp_path / "missing.png"))
    assert not ReferenceValidator.validate_image_path(str(text_file))
    assert not ReferenceValidator.validate_image_path(str(tmp_path))

def test_rejects_disguised_file(tmp_path):
    fake = tmp_path / "fake.png"
    fake.write_text("definitely not an image")
    
    assert not ReferenceValidator.validate_image_path(str(fake))

def test_accepts_real_image(image_path):
    assert ReferenceValidator.validate_image_path(image_path)

def test_filter_groups_drops_invalid(image_path, tmp_path):
    group = Group("Chapter", [image_path, str(tmp_path / "gone.png"), "ftp://x/y.png"],
                  metadata={'issue': 3})
    
    filtered = ReferenceValidator.filter_groups([group])
    
    assert filtered[0].images == (image_path,)
    assert filtered[0].title == "Chapter"
    assert filtered[0].metadata == {'issue': 3}
    assert ReferenceValidator.invalid_sources([group]) == [
        str(tmp_path / "gone.png"), "ftp://x/y.png"
    ]

def test_filter_groups_keeps_valid_group_object(image_path):
    group = Group("Clean", [image_path])
    
    assert ReferenceValidator.filter_groups([group])[0] is group
