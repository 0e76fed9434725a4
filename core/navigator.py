# core/navigator.py

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from config import NavigatorConfig
from core.catalog import Catalog, Group, ImageRef
from core.errors import EmptyCatalog, IndexOutOfRange

logger = logging.getLogger(__name__)

# Any handle the load primitive returns; the navigator never inspects it
ImageHandle = Any
FetchFunc = Callable[[ImageRef], ImageHandle]


@dataclass(frozen=True)
class DisplayChange:
    """Payload of a display change: the newly current image and its group"""
    index: int
    image: ImageHandle
    group: Group


DisplayCallback = Callable[[DisplayChange], None]


class Navigator:
    """
    Tracks the current page and keeps a window of images preloaded
    around it.

    Every index in [current_index, current_index + window_size - 1] that
    exists in the catalog has a loaded handle once an operation returns.
    Handles are only ever added, so moving backwards re-uses earlier loads.
    """

    def __init__(self,
                 catalog: Catalog,
                 fetch: FetchFunc,
                 start: int = 0,
                 preload_quantity: int = 1):
        self.catalog = catalog
        self.fetch = fetch
        
        if preload_quantity < 1:
            logger.warning("preload_quantity %d is below 1, using 1", preload_quantity)
            preload_quantity = 1
        self.window_size = preload_quantity
        
        self._images: Dict[int, ImageHandle] = {}
        self._callbacks: List[DisplayCallback] = []
        self.current_index = self._clamp_start(start)
        
        if len(catalog):
            self._prime(self.current_index)

    @classmethod
    def create(cls,
               catalog: Catalog,
               config: Union[NavigatorConfig, Mapping[str, Any], None],
               fetch: FetchFunc) -> 'Navigator':
        """Build a navigator from a NavigatorConfig or an options mapping"""
        if config is None:
            config = NavigatorConfig()
        elif not isinstance(config, NavigatorConfig):
            config = NavigatorConfig.from_dict(config)
        return cls(catalog, fetch,
                   start=config.start,
                   preload_quantity=config.preload_quantity)

    def _clamp_start(self, start: int) -> int:
        length = len(self.catalog)
        if length == 0:
            return 0
        clamped = min(max(start, 0), length - 1)
        if clamped != start:
            logger.warning("Start index %d out of range [0, %d), clamped to %d",
                           start, length, clamped)
        return clamped

    def _prime(self, index: int):
        # Current plus forward window, then the window behind
        self.load_range(index, self.window_size)
        self.load_range(index - self.window_size + 1, self.window_size)

    # Queries

    def length(self) -> int:
        return len(self.catalog)

    def has_next(self) -> bool:
        return self.current_index < len(self.catalog) - 1

    def has_previous(self) -> bool:
        return self.current_index > 0

    def current_element(self) -> Group:
        """Group owning the current image"""
        if not len(self.catalog):
            raise EmptyCatalog()
        return self.catalog.at(self.current_index).group

    def current_image(self) -> ImageHandle:
        if not len(self.catalog):
            raise EmptyCatalog()
        return self._images[self.current_index]

    def image_at(self, index: int) -> Optional[ImageHandle]:
        """Loaded handle for index, or None when it has not been requested yet"""
        return self._images.get(index)

    def loaded_indices(self) -> List[int]:
        return sorted(self._images)

    # Navigation

    def next(self):
        if not self.has_next():
            return
        
        # Extend the forward edge by one as the window slides
        self.load_range(self.current_index + self.window_size)
        self.current_index += 1
        self._emit()

    def previous(self):
        if not self.has_previous():
            return
        
        self.load_range(self.current_index - self.window_size)
        self.current_index -= 1
        self._emit()

    def jump_to(self, index: int):
        """Move to an arbitrary index, re-priming the window in both directions"""
        if not 0 <= index < len(self.catalog):
            raise IndexOutOfRange(index, len(self.catalog))
        
        self.load_range(index - self.window_size + 1, 2 * self.window_size)
        self.current_index = index
        self._emit()

    def show(self, index: Optional[int] = None):
        """Announce the current image, optionally moving to index first"""
        if index is not None:
            self.jump_to(index)
        elif len(self.catalog):
            self._emit()

    def load_range(self, start: int, count: int = 1):
        """
        Ensure images in [start, start + count) are loaded.

        Start is clamped to 0 and the end to the catalog length. Indices
        that already have a handle are left untouched, so calling this
        repeatedly is safe.
        """
        start = max(start, 0)
        end = min(start + count, len(self.catalog))
        
        for index in range(start, end):
            if index not in self._images:
                self._images[index] = self.fetch(self.catalog.at(index))
                logger.debug("Preload requested for index %d", index)

    # Observers

    def subscribe(self, callback: DisplayCallback):
        """Register callback(DisplayChange) for every display change"""
        if callback not in self._callbacks:
            self._callbacks.append(callback)

    def unsubscribe(self, callback: DisplayCallback):
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def _emit(self):
        change = DisplayChange(
            index=self.current_index,
            image=self._images[self.current_index],
            group=self.catalog.at(self.current_index).group
        )
        logger.debug("Display changed to index %d", self.current_index)
        for callback in list(self._callbacks):
            callback(change)
