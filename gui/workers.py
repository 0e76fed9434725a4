# Background load notifications

from PyQt6.QtCore import QObject, pyqtSignal

from core.image_loader import LoadedImage

class LoadNotifier(QObject):
    """
    Re-emits load completion on the thread that owns this object

    LoadedImage callbacks run on loader worker threads; widgets must only
    be touched from the UI thread, so completion is relayed as a signal.
    """
    image_loaded = pyqtSignal(object)  # LoadedImage
    
    def __init__(self, parent: QObject = None):
        super().__init__(parent)
        self._watched = set()
    
    def watch(self, handle: LoadedImage):
        """Emit image_loaded once handle finishes; already finished handles emit at once"""
        if not handle.is_pending:
            self.image_loaded.emit(handle)
            return
        
        if id(handle) in self._watched:
            return
        self._watched.add(id(handle))
        handle.add_done_callback(self._on_done)
    
    def _on_done(self, handle: LoadedImage):
        self._watched.discard(id(handle))
        self.image_loaded.emit(handle)
