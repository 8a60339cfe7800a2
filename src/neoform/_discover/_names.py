"""Resolution of declaration variables with Python's scoping of module names."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


def module_matches(path: Path, module: str) -> bool:
    """Whether ``path`` is the file of dotted ``module``.

    Only the trailing path components are compared, so ``graph/schema.py``
    matches both ``schema`` and ``graph.schema`` wherever the tree is rooted.
    """
    parts = tuple(module.split("."))
    stem = path.parent if path.name == "__init__.py" else path.with_suffix("")
    return stem.parts[-len(parts) :] == parts


class VariableIndex[T]:
    """Values of declarations keyed by the file and variable that bind them.

    A variable is looked up in the file that uses it, then in the module it
    was imported from, and only then among every file in discovery order.

    Example:
        >>> index = VariableIndex[str]()
        >>> index.add(Path("a.py"), "person", "Person")
        >>> index.add(Path("b.py"), "person", "Human")
        >>> index.resolve("person", file=Path("b.py"))
        'Human'

    """

    def __init__(self) -> None:
        self._by_file: dict[Path, dict[str, T]] = {}
        self._first: dict[str, T] = {}

    def add(self, file: Path, variable: str, value: T) -> None:
        """Bind ``variable`` of ``file``; the first binding of a file wins."""
        self._by_file.setdefault(file, {}).setdefault(variable, value)
        self._first.setdefault(variable, value)

    def resolve(self, variable: str, *, file: Path, module: str | None = None) -> T | None:
        """Return the value ``variable`` names inside ``file``.

        Args:
            variable: Name as declared in its defining module.
            file: File the name is used in.
            module: Dotted module the name was imported from, if any.

        """
        if module is None:
            scopes = [self._by_file.get(file, {})]
        else:
            scopes = [variables for path, variables in self._by_file.items() if module_matches(path, module)]
        for variables in scopes:
            if variable in variables:
                return variables[variable]
        return self._first.get(variable)
