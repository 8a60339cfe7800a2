"""Static evaluation of declaration field expressions.

Only literal shapes are evaluated: constants, containers, negative numbers,
neoform enum members and nested neoform model calls. Names that point at
other declarations become :class:`Reference` values, and everything else is
kept as :class:`Opaque` source text. Nothing is ever executed.
"""

from __future__ import annotations

import ast
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from neoform._registry import MODEL_TYPES, PACKAGE, classify, lookup_enum, lookup_model

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from ._imports import ImportTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Reference:
    """A field value naming another declaration.

    Attributes:
        name: Identifier of the referenced declaration.
        attribute: Field read from it (``social.graph_name``), if any.
        module: Dotted module the declaration was imported from, or
            ``None`` for a name of the same module.

    """

    name: str
    attribute: str | None = None
    module: str | None = None

    @property
    def attribute_module(self) -> str:
        """Module ``name`` would denote if it were a module, as in ``analytics.social``."""
        return f"{self.module}.{self.name}" if self.module else self.name


@dataclass(frozen=True, slots=True)
class ModelLiteral:
    """A nested neoform model call such as ``nf.Property(name="id", ...)``."""

    type_name: str
    fields: Mapping[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True, slots=True)
class Opaque:
    """An expression with no static value; ``source`` is its source text."""

    source: str


class LiteralEvaluator:
    """Evaluate field expressions of one module.

    Args:
        imports: Import table of the module.
        local_classes: Classes declared in the module that subclass a neoform
            model, mapped to the neoform class name they extend.
        constants: Module-level names bound to plain literals.
        class_fields: Fields set in the bodies of those local classes, applied
            under the keywords of every call of the class.

    Attributes:
        references: All references met so far, in order.

    """

    def __init__(
        self,
        imports: ImportTable,
        local_classes: Mapping[str, str] | None = None,
        constants: Mapping[str, Any] | None = None,
        class_fields: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> None:
        self.imports = imports
        self.local_classes = local_classes if local_classes is not None else {}
        self.constants = constants if constants is not None else {}
        self.class_fields = class_fields if class_fields is not None else {}
        self.references: list[Reference] = []

    def model_class_name(self, func: ast.expr) -> str | None:
        """Return the neoform class name a callee or base class refers to."""
        if isinstance(func, ast.Name) and func.id in self.local_classes:
            return self.local_classes[func.id]
        qualified = self.imports.resolve(func)
        if qualified is None:
            return None
        model = lookup_model(qualified)
        return model.__name__ if model is not None else None

    def evaluate(self, node: ast.expr) -> Any:  # noqa: PLR0911
        """Return the static value of ``node``."""
        match node:
            case ast.Constant(value=value):
                return value
            case ast.List(elts=elts) | ast.Tuple(elts=elts) | ast.Set(elts=elts):
                return [self.evaluate(item) for item in elts]
            case ast.Dict(keys=keys, values=values):
                return self._evaluate_dict(node, keys, values)
            case ast.UnaryOp(op=ast.USub(), operand=ast.Constant(value=int() | float() as number)):
                return Opaque(ast.unparse(node)) if isinstance(number, bool) else -number
            case ast.Call(func=func):
                return self._evaluate_call(node, func)
            case ast.Name(id=name):
                return self._evaluate_name(node, name)
            case ast.Attribute():
                return self._evaluate_attribute(node)
            case _:
                return Opaque(ast.unparse(node))

    def evaluate_call_fields(self, call: ast.Call) -> dict[str, Any]:
        """Evaluate the keyword arguments of a model call.

        Calling a local subclass also yields the fields its class body sets,
        unless a keyword overrides them.
        """
        fields: dict[str, Any] = {}
        for keyword in call.keywords:
            if keyword.arg is None:
                logger.debug("Ignoring **%s in %s", ast.unparse(keyword.value), ast.unparse(call.func))
                continue
            fields[keyword.arg] = self.evaluate(keyword.value)
        if call.args:
            logger.debug("Ignoring positional arguments of %s", ast.unparse(call.func))
        if isinstance(call.func, ast.Name):
            for name, value in self.class_fields.get(call.func.id, {}).items():
                if name not in fields:
                    fields[name] = value
                    self.references.extend(references_in(value))
        return fields

    def _evaluate_dict(self, node: ast.Dict, keys: list[ast.expr | None], values: list[ast.expr]) -> Any:
        result: dict[Any, Any] = {}
        for key, value in zip(keys, values, strict=True):
            if key is None:
                return Opaque(ast.unparse(node))
            evaluated_key = self.evaluate(key)
            if isinstance(evaluated_key, (Reference, ModelLiteral, Opaque, list)):
                return Opaque(ast.unparse(node))
            result[evaluated_key] = self.evaluate(value)
        return result

    def _evaluate_call(self, node: ast.Call, func: ast.expr) -> Any:
        type_name = self.model_class_name(func)
        if type_name is None:
            return Opaque(ast.unparse(node))
        return ModelLiteral(type_name, self.evaluate_call_fields(node))

    def _is_helper_class(self, name: str) -> bool:
        """Whether ``name`` is a local subclass of a nested model such as ``Property``."""
        return name in self.local_classes and classify(MODEL_TYPES[self.local_classes[name]]) is None

    def _reference(self, name: str, attribute: str | None = None, module: str | None = None) -> Reference:
        reference = Reference(name, attribute, module)
        self.references.append(reference)
        return reference

    def _evaluate_name(self, node: ast.Name, name: str) -> Any:
        if name in self.constants:
            return self.constants[name]
        if self._is_helper_class(name):
            return Opaque(name)
        qualified = self.imports.resolve(node)
        if qualified is None:
            return self._reference(name)
        if qualified.split(".")[0] == PACKAGE:
            return Opaque(name)
        # imported from another declaration file under its original name
        module, _, name = qualified.rpartition(".")
        return self._reference(name, module=module or None)

    def _evaluate_attribute(self, node: ast.Attribute) -> Any:
        qualified = self.imports.resolve(node)
        if qualified is None:
            match node.value:
                case ast.Name(id=name) if name not in self.constants and not self._is_helper_class(name):
                    return self._reference(name, node.attr)
                case _:
                    return Opaque(ast.unparse(node))

        enum_path, _, member = qualified.rpartition(".")
        enum_type = lookup_enum(enum_path)
        if enum_type is not None:
            try:
                return enum_type[member]
            except KeyError:
                logger.warning("%s has no member %s", enum_type.__name__, member)
                return Opaque(ast.unparse(node))
        if qualified.split(".")[0] == PACKAGE:
            return Opaque(ast.unparse(node))

        match node.value:
            case ast.Name(id=alias) if self.imports.is_module(alias):
                # module.declaration
                return self._reference(node.attr, module=self.imports.aliases[alias])
            case ast.Name(id=alias):
                # declaration.field, or module.declaration after ``from package import module``;
                # the two are told apart once every declaration is known.
                module, _, name = self.imports.aliases[alias].rpartition(".")
                return self._reference(name, node.attr, module or None)
            case ast.Attribute(value=ast.Name(), attr=name):
                # module.declaration.field
                return self._reference(name, node.attr, qualified.rsplit(".", 2)[0])
            case _:
                return Opaque(ast.unparse(node))


def references_in(value: Any) -> Iterator[Reference]:
    """Yield the references inside an evaluated value, depth first."""
    match value:
        case Reference():
            yield value
        case ModelLiteral(fields=fields):
            for item in fields.values():
                yield from references_in(item)
        case list():
            for item in value:
                yield from references_in(item)
        case dict():
            for item in value.values():
                yield from references_in(item)
