# core/catalog.py

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Sequence, Tuple

from core.errors import IndexOutOfRange


@dataclass(frozen=True, eq=False)
class Group:
    """Metadata container owning an ordered run of images"""
    title: str
    images: Tuple[str, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, 'images', tuple(self.images))

    def __len__(self) -> int:
        return len(self.images)


@dataclass(frozen=True)
class ImageRef:
    """One image source plus a back-reference to its owning group"""
    source: str
    group: Group
    position: int = 0

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(('http://', 'https://'))


class Catalog:
    """
    Ordered, immutable sequence of image references for one reading session
    """

    def __init__(self, refs: Sequence[ImageRef], groups: Sequence[Group] = ()):
        self._refs: Tuple[ImageRef, ...] = tuple(refs)
        self._groups: Tuple[Group, ...] = tuple(groups)

    @classmethod
    def build(cls, groups: Sequence[Group]) -> 'Catalog':
        """
        Flatten groups into one sequence.

        Order is group order first, then the order of images inside
        each group. Every ImageRef keeps a reference to its source group.
        """
        refs: List[ImageRef] = []
        for group in groups:
            for position, source in enumerate(group.images):
                refs.append(ImageRef(source=source, group=group, position=position))
        return cls(refs, groups)

    @property
    def groups(self) -> Tuple[Group, ...]:
        return self._groups

    def length(self) -> int:
        return len(self._refs)

    def at(self, index: int) -> ImageRef:
        """Return the reference at index, raising IndexOutOfRange when invalid"""
        if not 0 <= index < len(self._refs):
            raise IndexOutOfRange(index, len(self._refs))
        return self._refs[index]

    def first_index_of(self, group: Group) -> int:
        """Catalog index of the first image of a group"""
        offset = 0
        for candidate in self._groups:
            if candidate is group:
                if not candidate.images:
                    raise ValueError(f"Group '{group.title}' has no images")
                return offset
            offset += len(candidate.images)
        raise ValueError(f"Group '{group.title}' is not part of this catalog")

    def __len__(self) -> int:
        return len(self._refs)

    def __iter__(self) -> Iterator[ImageRef]:
        return iter(self._refs)

    def __getitem__(self, index: int) -> ImageRef:
        return self.at(index)
