# core/image_loader.py

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

import cv2
import numpy as np
import requests

from config import LoaderConfig
from core.catalog import ImageRef
from utils.image_utils import decode_image, limit_dimension

logger = logging.getLogger(__name__)


class LoadedImage:
    """
    Handle to one fetched/decoded image.

    The handle is returned immediately and stays pending until the
    underlying future completes. A failed load is still a valid handle;
    it reports ``failed`` and keeps the error.
    """

    def __init__(self, ref: ImageRef, future: Future):
        self.ref = ref
        self._future = future

    @property
    def is_pending(self) -> bool:
        return not self._future.done()

    @property
    def is_ready(self) -> bool:
        return self._future.done() and self._future.exception() is None

    @property
    def failed(self) -> bool:
        return self._future.done() and self._future.exception() is not None

    @property
    def error(self) -> Optional[BaseException]:
        if not self._future.done():
            return None
        return self._future.exception()

    @property
    def image(self) -> Optional[np.ndarray]:
        """Decoded BGR image, or None while pending or after a failure"""
        if self.is_ready:
            return self._future.result()
        return None

    def wait(self, timeout: Optional[float] = None) -> Optional[np.ndarray]:
        """Block until the load finishes; returns None on failure"""
        if self._future.exception(timeout=timeout) is not None:
            return None
        return self._future.result()

    def add_done_callback(self, callback: Callable[['LoadedImage'], None]):
        """Call callback(handle) once the load finishes, possibly on a worker thread"""
        self._future.add_done_callback(lambda _future: callback(self))

    def __repr__(self) -> str:
        state = 'pending' if self.is_pending else ('failed' if self.failed else 'ready')
        return f"LoadedImage({self.ref.source!r}, {state})"


class ImageLoader:
    """
    Fire-and-forget image loading on a thread pool
    """

    def __init__(self, config: LoaderConfig = None):
        self.config = config or LoaderConfig()
        self.executor = ThreadPoolExecutor(
            max_workers=max(1, self.config.n_workers),
            thread_name_prefix="image-loader"
        )
        self.session = requests.Session()

    def fetch(self, ref: ImageRef) -> LoadedImage:
        """Start loading ref and return its handle without blocking"""
        try:
            future = self.executor.submit(self._read, ref)
        except RuntimeError as e:
            # Pool already shut down; report it on the handle like any failed load
            future = Future()
            future.set_exception(e)
        handle = LoadedImage(ref, future)
        handle.add_done_callback(self._log_result)
        return handle

    def _read(self, ref: ImageRef) -> np.ndarray:
        if ref.is_remote:
            response = self.session.get(ref.source, timeout=self.config.request_timeout)
            response.raise_for_status()
            image = decode_image(response.content)
        else:
            image = cv2.imread(ref.source, cv2.IMREAD_COLOR)
        
        if image is None:
            raise OSError(f"Could not decode image: {ref.source}")
        
        return limit_dimension(image, self.config.max_image_dimension)

    @staticmethod
    def _log_result(handle: LoadedImage):
        if handle.failed:
            logger.warning("Failed to load %s: %s", handle.ref.source, handle.error)
        else:
            logger.debug("Loaded %s", handle.ref.source)

    def shutdown(self, wait: bool = True):
        """Release worker threads; loads already started run to completion"""
        self.executor.shutdown(wait=wait)
        self.session.close()

    def __enter__(self) -> 'ImageLoader':
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.shutdown()
