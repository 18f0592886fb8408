from typing import List, NamedTuple, Optional

from .config import BACKGROUND_CLASS


class ClassEntry(NamedTuple):
    name: str
    numeric_id: Optional[int]
    include_in_registry: bool


def capitalize_first(name: str) -> str:
    """Upper-case only the first letter, 'adidas-text' -> 'Adidas-text'."""
    if not name:
        return ""
    return name[0].upper() + name[1:]


class ClassRegistry:
    """
    Hands out dense class ids in the order classes are discovered.

    The background class only gets an id (and a place in the class list)
    when `include_background` is set; ids are never reused.
    """

    def __init__(self, background_class: str = BACKGROUND_CLASS):
        self.background_class = background_class
        self.entries: List[ClassEntry] = []
        self._next_id = 0

    def is_background(self, class_name: str) -> bool:
        return class_name == self.background_class

    def register(self, class_name: str, is_background: Optional[bool] = None,
                 include_background: bool = False) -> ClassEntry:
        if is_background is None:
            is_background = self.is_background(class_name)

        if is_background and not include_background:
            entry = ClassEntry(class_name, None, False)
        else:
            entry = ClassEntry(class_name, self._next_id, True)
            self._next_id += 1

        self.entries.append(entry)
        return entry

    @property
    def included(self) -> List[ClassEntry]:
        return [e for e in self.entries if e.include_in_registry]

    @property
    def names(self) -> List[str]:
        """Capitalized names of the registered classes in id order."""
        return [capitalize_first(e.name) for e in self.included]

    def __len__(self) -> int:
        return self._next_id
