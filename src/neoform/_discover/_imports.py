"""Per-file import table used to resolve names to qualified paths."""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from neoform._registry import ENUM_TYPES, MODEL_TYPES, PACKAGE

if TYPE_CHECKING:
    from collections.abc import Iterator


def _module_statements(body: list[ast.stmt]) -> Iterator[ast.stmt]:
    """Statements run at import time, including those under ``if`` and ``try``."""
    for statement in body:
        yield statement
        match statement:
            case ast.If(body=inner, orelse=orelse):
                yield from _module_statements(inner)
                yield from _module_statements(orelse)
            case ast.Try(body=inner, handlers=handlers, orelse=orelse, finalbody=finalbody):
                yield from _module_statements(inner)
                for handler in handlers:
                    yield from _module_statements(handler.body)
                yield from _module_statements(orelse)
                yield from _module_statements(finalbody)


@dataclass(slots=True)
class ImportTable:
    """Maps local names of one module to the dotted paths they were imported from.

    Attributes:
        aliases: Local name to qualified path, e.g. ``{"nf": "neoform"}`` or
            ``{"NT": "neoform.NodeType"}``.
        star_modules: Modules imported with ``from module import *``.
        modules: Local names bound by ``import module`` statements.

    """

    aliases: dict[str, str] = field(default_factory=dict)
    star_modules: list[str] = field(default_factory=list)
    modules: set[str] = field(default_factory=set)

    @classmethod
    def from_module(cls, tree: ast.Module) -> ImportTable:
        """Collect the imports of ``tree`` that bind module-level names.

        Imports inside function and class bodies are local to them and are
        not collected.

        Relative imports are kept relative to the importing package:
        ``from .schema import person`` binds ``person`` to ``schema.person``.
        Relative star imports are ignored.
        """
        table = cls()
        for node in _module_statements(tree.body):
            match node:
                case ast.Import(names=names):
                    for alias in names:
                        if alias.asname:
                            local, target = alias.asname, alias.name
                        else:
                            local = target = alias.name.split(".")[0]
                        table.aliases[local] = target
                        table.modules.add(local)
                case ast.ImportFrom(module=module, names=names, level=level):
                    for alias in names:
                        if alias.name == "*":
                            if level == 0 and module:
                                table.star_modules.append(module)
                        else:
                            target = f"{module}.{alias.name}" if module else alias.name
                            table.aliases[alias.asname or alias.name] = target
        return table

    def is_module(self, name: str) -> bool:
        """Whether ``name`` is bound by ``import module``."""
        return name in self.modules

    def resolve(self, node: ast.expr) -> str | None:
        """Return the qualified path of a name or attribute chain.

        ``nf.PropertyType.STRING`` resolves to ``neoform.PropertyType.STRING``
        after ``import neoform as nf``. Names not bound by an import resolve to
        ``None``, except public neoform names pulled in by a star import.
        """
        parts: list[str] = []
        current = node
        while isinstance(current, ast.Attribute):
            parts.append(current.attr)
            current = current.value
        if not isinstance(current, ast.Name):
            return None
        parts.append(current.id)
        parts.reverse()

        head, *rest = parts
        if head in self.aliases:
            return ".".join([self.aliases[head], *rest])
        if any(module.split(".")[0] == PACKAGE for module in self.star_modules) and (
            head in MODEL_TYPES or head in ENUM_TYPES
        ):
            return ".".join([PACKAGE, *parts])
        return None
