from dataclasses import dataclass, field
from typing import Any, Dict
import yaml
from pathlib import Path

@dataclass
class NavigatorConfig:
    """Configuration for page navigation and preloading"""
    start: int = 0
    preload_quantity: int = 1  # Window size, images kept loaded ahead

    @classmethod
    def from_dict(cls, options: Dict[str, Any]) -> 'NavigatorConfig':
        """Build from a plain options mapping, missing keys keep defaults"""
        defaults = cls()
        start = options.get('start')
        preload = options.get('preload_quantity')
        return cls(
            start=defaults.start if start is None else int(start),
            preload_quantity=defaults.preload_quantity if preload is None else int(preload)
        )


@dataclass
class LoaderConfig:
    """Configuration for the background image loader"""
    n_workers: int = 4
    max_image_dimension: int = 2048  # 0 disables downscaling
    request_timeout: float = 10.0  # Seconds, remote images only
    validate_references: bool = False


@dataclass
class ViewerConfig:
    """Configuration for the reader window"""
    window_width: int = 1000
    window_height: int = 1200
    fit_to_window: bool = True


@dataclass
class ReaderConfig:
    """Application-wide configuration"""
    log_level: str = "INFO"
    log_dir: str = "logs"
    
    # Navigation
    navigator: NavigatorConfig = field(default_factory=NavigatorConfig)
    
    # Image loading
    loader: LoaderConfig = field(default_factory=LoaderConfig)
    
    # Window
    viewer: ViewerConfig = field(default_factory=ViewerConfig)
    
    def save(self, path: str = "config.yaml"):
        """Save configuration to YAML file"""
        config_dict = {
            'log_level': self.log_level,
            'log_dir': self.log_dir,
            'navigator': {
                'start': self.navigator.start,
                'preload_quantity': self.navigator.preload_quantity
            },
            'loader': {
                'n_workers': self.loader.n_workers,
                'max_image_dimension': self.loader.max_image_dimension,
                'request_timeout': self.loader.request_timeout,
                'validate_references': self.loader.validate_references
            },
            'viewer': {
                'window_width': self.viewer.window_width,
                'window_height': self.viewer.window_height,
                'fit_to_window': self.viewer.fit_to_window
            }
        }
        
        with open(path, 'w') as f:
            yaml.dump(config_dict, f, default_flow_style=False, indent=2)
    
    @classmethod
    def load(cls, path: str = "config.yaml") -> 'ReaderConfig':
        """Load configuration from YAML file"""
        if not Path(path).exists():
            return cls()  # Return default config
        
        with open(path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}
        
        config = cls()
        
        config.log_level = config_dict.get('log_level', config.log_level)
        config.log_dir = config_dict.get('log_dir', config.log_dir)
        
        if 'navigator' in config_dict:
            config.navigator = NavigatorConfig.from_dict(config_dict['navigator'] or {})
        
        if 'loader' in config_dict:
            ld = config_dict['loader'] or {}
            config.loader = LoaderConfig(
                n_workers=ld.get('n_workers', config.loader.n_workers),
                max_image_dimension=ld.get('max_image_dimension', config.loader.max_image_dimension),
                request_timeout=ld.get('request_timeout', config.loader.request_timeout),
                validate_references=ld.get('validate_references', config.loader.validate_references)
            )
        
        if 'viewer' in config_dict:
            vw = config_dict['viewer'] or {}
            config.viewer = ViewerConfig(
                window_width=vw.get('window_width', config.viewer.window_width),
                window_height=vw.get('window_height', config.viewer.window_height),
                fit_to_window=vw.get('fit_to_window', config.viewer.fit_to_window)
            )
        
        return config
