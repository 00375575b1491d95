from dataclasses import dataclass
from typing import Iterable, Iterator, Optional


@dataclass
class Variable:
    label: str
    value: float


class VarTable:
    """Session variables, kept in definition order.

    Lookups are linear scans; a REPL session holds a handful of names.
    """

    def __init__(self, variables: Iterable[Variable] = ()):
        self._variables: list[Variable] = []
        for var in variables:
            self.store(var.label, var.value)

    def store(self, label: str, value: float) -> None:
        for var in self._variables:
            if var.label == label:
                var.value = value
                return
        self._variables.append(Variable(label=label, value=value))

    def contains(self, label: str) -> bool:
        return any(var.label == label for var in self._variables)

    def retrieve(self, label: str) -> Optional[float]:
        for var in self._variables:
            if var.label == label:
                return var.value
        return None

    def __contains__(self, label: object) -> bool:
        return isinstance(label, str) and self.contains(label)

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def __repr__(self) -> str:
        return f"VarTable({self._variables!r})"
