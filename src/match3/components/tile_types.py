from dataclasses import dataclass, field
from typing import Iterable, List

@dataclass(slots=True)
class TileTypes:
    """Canonical tile type names stored on a single entity.

    This component lives alongside TileTypeRegistry (tag). ``spawnable`` is the
    subset the random generator draws from; it never silently becomes empty
    unless a caller passes ``allow_empty``.
    """
    types: List[str]
    spawnable: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.types = _unique(self.types)
        if self.spawnable:
            # Preserve order while filtering unknown types.
            self.spawnable = self._known(self.spawnable) or list(self.types)
        else:
            self.spawnable = list(self.types)

    def _known(self, type_names: Iterable[str]) -> List[str]:
        return [name for name in _unique(type_names) if name in self.types]

    def spawnable_types(self) -> List[str]:
        return list(self.spawnable)

    def defined_types(self) -> List[str]:
        return list(self.types)

    def set_spawnable(self, type_names: Iterable[str], *, allow_empty: bool = False) -> None:
        filtered = self._known(type_names)
        if not filtered and not allow_empty:
            filtered = list(self.types)
        self.spawnable = filtered

    def enable_type(self, type_name: str) -> None:
        if type_name in self.types and type_name not in self.spawnable:
            self.spawnable.append(type_name)

    def disable_type(self, type_name: str, *, allow_empty: bool = False) -> None:
        self.spawnable = [name for name in self.spawnable if name != type_name]
        if not self.spawnable and not allow_empty:
            self.spawnable = list(self.types)

    def register_type(self, type_name: str, *, spawnable: bool = True) -> None:
        if type_name not in self.types:
            self.types.append(type_name)
        if spawnable:
            self.enable_type(type_name)
        elif type_name in self.spawnable:
            self.spawnable = [name for name in self.spawnable if name != type_name]


def _unique(names: Iterable[str]) -> List[str]:
    seen: set[str] = set()
    result: List[str] = []
    for name in names:
        if name not in seen:
            result.append(name)
            seen.add(name)
    return result
