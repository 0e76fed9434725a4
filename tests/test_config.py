# tests/test_config.py

import yaml
from config import LoaderConfig, NavigatorConfig, ReaderConfig

def test_defaults_when_missing(tmp_path):
    config = ReaderConfig.load(str(tmp_path / "absent.yaml"))
    
    assert config.navigator.start == 0
    assert config.navigator.preload_quantity == 1
    assert config.loader == LoaderConfig()

def test_save_and_load(tmp_path):
    path = str(tmp_path / "config.yaml")
    config = ReaderConfig(log_level="DEBUG")
    config.navigator.preload_quantity = 4
    config.loader.validate_references = True
    config.viewer.fit_to_window = False
    config.save(path)
    
    loaded = ReaderConfig.load(path)
    
    assert loaded == config

def test_partial_file_keeps_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({'navigator': {'start': 7}, 'loader': {'n_workers': 1}}))
    
    config = ReaderConfig.load(str(path))
    
    assert config.navigator == NavigatorConfig(start=7, preload_quantity=1)
    assert config.loader.n_workers == 1
    assert config.loader.max_image_dimension == LoaderConfig().max_image_dimension
    assert config.log_level == "INFO"

def test_empty_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    
    assert ReaderConfig.load(str(path)) == ReaderConfig()

def test_navigator_options_mapping():
    assert NavigatorConfig.from_dict({}) == NavigatorConfig()
    assert NavigatorConfig.from_dict({'start': None, 'preload_quantity': '3'}) == \
        NavigatorConfig(start=0, preload_quantity=3)
