# topmark:header:start
#
#   project      : ShapeGen
#   file         : context.py
#   file_relpath : src/shapegen/codegen/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-pass state shared by the generators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from shapegen.config.logging import get_logger
from shapegen.core.errors import SymbolCollisionError

if TYPE_CHECKING:
    from shapegen.codegen.delegator import WriterDelegator
    from shapegen.codegen.symbol_provider import SymbolProvider
    from shapegen.config.logging import ShapegenLogger
    from shapegen.model.model import Model
    from shapegen.model.shape_id import ShapeId

logger: ShapegenLogger = get_logger(__name__)


@dataclass
class CodegenContext:
    """Everything a generator needs during one pass.

    Attributes:
        model (Model): The (possibly rewritten) model being generated.
        module_name (str): Root Go module path.
        symbol_provider (SymbolProvider): Shape identities for this pass.
        delegator (WriterDelegator): Output units for this pass.
    """

    model: Model
    module_name: str
    symbol_provider: SymbolProvider
    delegator: WriterDelegator
    _emitted: set[tuple[str, str, ShapeId]] = field(default_factory=set, repr=False)
    _names: dict[tuple[str, str], ShapeId] = field(default_factory=dict, repr=False)

    @property
    def types_namespace(self) -> str:
        """Import path of the generated types package."""
        return f"{self.module_name}/types"

    @property
    def schemas_namespace(self) -> str:
        """Import path of the generated schemas package."""
        return f"{self.module_name}/schemas"

    def claim(self, kind: str, namespace: str, shape_id: ShapeId) -> bool:
        """Record that ``kind`` code for ``shape_id`` is emitted into ``namespace``.

        Returns:
            bool: True the first time, False if it was already claimed this pass.
        """
        key = (kind, namespace, shape_id)
        if key in self._emitted:
            logger.trace("Already emitted %s for %s in %s", kind, shape_id, namespace)
            return False
        self._emitted.add(key)
        return True

    def is_claimed(self, kind: str, shape_id: ShapeId) -> bool:
        """Whether ``kind`` code for ``shape_id`` was claimed in any namespace this pass."""
        return any(key[0] == kind and key[2] == shape_id for key in self._emitted)

    def reserve_name(self, namespace: str, name: str, shape_id: ShapeId) -> None:
        """Bind the Go identifier ``name`` in ``namespace`` to ``shape_id``.

        Raises:
            SymbolCollisionError: If ``name`` is already bound to another shape.
        """
        owner = self._names.setdefault((namespace, name), shape_id)
        if owner != shape_id:
            raise SymbolCollisionError(namespace, name, owner, shape_id)

    def package_dir(self, namespace: str) -> str:
        """Relative directory of the package at ``namespace`` (``"."`` for the root)."""
        if namespace == self.module_name:
            return "."
        prefix = f"{self.module_name}/"
        if namespace.startswith(prefix):
            return f"./{namespace[len(prefix):]}"
        return f"./{namespace.rsplit('/', 1)[-1]}"
