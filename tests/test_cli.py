# tests/test_cli.py

import json

import cv2
import numpy as np
import pytest
import yaml
from cli import main_cli

@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({'log_dir': str(tmp_path / "logs"), 'log_level': 'WARNING'}))
    return str(path)

@pytest.fixture
def comic_dir(tmp_path):
    root = tmp_path / "comic"
    for chapter, count in [("ch1", 2), ("ch2", 3)]:
        (root / chapter).mkdir(parents=True)
        for i in range(count):
            cv2.imwrite(str(root / chapter / f"{i}.png"),
                        np.zeros((8, 8, 3), dtype=np.uint8))
    return str(root)

def test_info_lists_groups(config_path, comic_dir, capsys):
    assert main_cli(['-c', config_path, 'info', comic_dir]) == 0
    
    out = capsys.readouterr().out
    assert "2 groups, 5 pages" in out
    assert "1. ch1 (pages 1-2)" in out
    assert "2. ch2 (pages 3-5)" in out

def test_info_json(config_path, comic_dir, capsys):
    assert main_cli(['-c', config_path, 'info', '--json', comic_dir]) == 0
    
    data = json.loads(capsys.readouterr().out)
    assert [entry['pages'] for entry in data] == [2, 3]

def test_check_reports_invalid(config_path, tmp_path, capsys):
    manifest = tmp_path / "book.yaml"
    manifest.write_text(yaml.safe_dump({
        'pages': [{'title': 'A', 'images': ['missing.png', 'https://example.com/1.png']}]
    }))
    
    assert main_cli(['-c', config_path, 'check', str(manifest)]) == 1
    
    out = capsys.readouterr().out
    assert "Checked 2 references" in out
    assert str(tmp_path / "missing.png") in out

def test_unsupported_source_exits_nonzero(config_path, tmp_path, capsys):
    assert main_cli(['-c', config_path, 'info', str(tmp_path / "nothing.cbz")]) == 1
    assert "Error:" in capsys.readouterr().err

def test_no_command_prints_help(capsys):
    assert main_cli([]) == 0
    assert "usage" in capsys.readouterr().out

def test_info_undecodable_manifest(config_path, tmp_path, capsys):
    manifest = tmp_path / "book.yaml"
    manifest.write_bytes(b"pages:\n  - title: \xff\xfe\n")
    
    assert main_cli(['-c', config_path, 'info', str(manifest)]) == 1
    assert "Error:" in capsys.readouterr().err
