import sys
import argparse
import logging
from PyQt6.QtWidgets import QApplication
from gui.main_window import ReaderWindow
from config import ReaderConfig
from utils.logging_config import setup_logging

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Comic Reader")
    parser.add_argument('source', nargs='?',
                        help='Folder of images, manifest (.yaml/.json) or single image')
    parser.add_argument('-c', '--config', default='config.yaml',
                        help='Configuration file')
    parser.add_argument('--start', type=int, help='Page to open first (zero-based)')
    parser.add_argument('--preload', type=int, help='Number of pages to keep preloaded')
    return parser.parse_args(argv)

def run_reader(config: ReaderConfig, source: str = None, start: int = None) -> int:
    """Create the Qt application and run the reader until it closes"""
    logger = logging.getLogger(__name__)
    logger.info("Starting Comic Reader")
    
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Comic Reader")
    app.setOrganizationName("ComicReader")
    
    window = ReaderWindow(config)
    window.show()
    
    if source:
        window.open_source(source, start=start)
    
    return app.exec()

def main(argv=None):
    """Main application entry point"""
    args = parse_args(argv)
    
    # Load configuration
    config = ReaderConfig.load(args.config)
    if args.preload is not None:
        config.navigator.preload_quantity = args.preload
    
    setup_logging(config.log_level, config.log_dir)
    
    sys.exit(run_reader(config, args.source, args.start))

if __name__ == "__main__":
    main()
