# topmark:header:start
#
#   project      : ShapeGen
#   file         : __init__.py
#   file_relpath : src/shapegen/codegen/serde/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Serialization and deserialization code, dispatched by shape kind.

Placement:
    - Structures get ``Serialize`` / ``Deserialize`` methods in their own package
      (``types``, or the root package for operation inputs and outputs).
    - Union variants get their methods in the ``types`` package.
    - Lists, sets, maps and unions are encoded by unexported helper functions
      (``serialize<Name>`` / ``deserialize<Name>``). A helper is emitted into every
      package that needs it, once per pass.
      A collection that nothing emitted in the pass uses gets its helpers in the
      ``types`` package.

Public modules:
    - shapegen.codegen.serde.common
    - shapegen.codegen.serde.serializers
    - shapegen.codegen.serde.deserializers
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shapegen.codegen.serde.common import (
    DESERIALIZERS_FILE,
    HELPER_KINDS,
    SERIALIZERS_FILE,
    deserializer_name,
    serializer_name,
)
from shapegen.codegen.serde.deserializers import (
    ListDeserializer,
    MapDeserializer,
    StructureDeserializer,
    UnionDeserializer,
    UnionVariantDeserializer,
)
from shapegen.codegen.serde.serializers import (
    ListSerializer,
    MapSerializer,
    StructureSerializer,
    UnionSerializer,
    UnionVariantSerializer,
)
from shapegen.config.logging import get_logger
from shapegen.core.errors import UnsupportedShapeError
from shapegen.model.prelude import is_prelude_shape
from shapegen.model.shapes import ShapeType

if TYPE_CHECKING:
    from shapegen.codegen.context import CodegenContext
    from shapegen.codegen.writer import Writable
    from shapegen.config.logging import ShapegenLogger
    from shapegen.model.shapes import Shape

logger: ShapegenLogger = get_logger(__name__)


def serde_generators_for(ctx: CodegenContext, shape: Shape) -> tuple[Writable, Writable]:
    """Return the ``(serializer, deserializer)`` writables for ``shape``.

    Args:
        ctx (CodegenContext): The generation context.
        shape (Shape): A list, set, map, structure or union shape.

    Returns:
        tuple[Writable, Writable]: Encoder and decoder generators.

    Raises:
        UnsupportedShapeError: For any other kind.
    """
    match shape.type:
        case ShapeType.LIST | ShapeType.SET:
            return ListSerializer(ctx, shape), ListDeserializer(ctx, shape)
        case ShapeType.MAP:
            return MapSerializer(ctx, shape), MapDeserializer(ctx, shape)
        case ShapeType.STRUCTURE:
            return StructureSerializer(ctx, shape), StructureDeserializer(ctx, shape)
        case ShapeType.UNION:
            return UnionSerializer(ctx, shape), UnionDeserializer(ctx, shape)
        case _:
            raise UnsupportedShapeError(shape.type, str(shape.id))


def _emit(ctx: CodegenContext, shape: Shape, namespace: str, writables: tuple[Writable, Writable]) -> None:
    directory = ctx.package_dir(namespace)
    serializer, deserializer = writables
    ctx.delegator.use_file_writer(f"{directory}/{SERIALIZERS_FILE}", namespace, serializer)
    ctx.delegator.use_file_writer(f"{directory}/{DESERIALIZERS_FILE}", namespace, deserializer)


def _value_targets(ctx: CodegenContext, shape: Shape) -> list[Shape]:
    if shape.type is ShapeType.MAP:
        return [ctx.model.expect_member_target(shape, "value")]
    return [ctx.model.expect_target(member) for member in shape.members]


def ensure_helpers(ctx: CodegenContext, shape: Shape, namespace: str) -> None:
    """Emit the helpers needed to encode members of ``shape`` into ``namespace``.

    Helpers for nested collections are emitted too. Unions are encoded through
    their variant types, whose methods are emitted into the types package.
    """
    for target in _value_targets(ctx, shape):
        if target.type in HELPER_KINDS:
            _emit_helpers(ctx, target, namespace)


def _emit_helpers(ctx: CodegenContext, target: Shape, namespace: str) -> bool:
    if not ctx.claim("serde", namespace, target.id):
        return False
    ctx.reserve_name(namespace, serializer_name(target), target.id)
    ctx.reserve_name(namespace, deserializer_name(target), target.id)
    logger.debug("Serde helpers for %s in %s", target.id, namespace)
    _emit(ctx, target, namespace, serde_generators_for(ctx, target))
    if target.type is ShapeType.UNION:
        write_union_variants(ctx, target)
    else:
        ensure_helpers(ctx, target, namespace)
    return True


def write_union_variants(ctx: CodegenContext, shape: Shape) -> bool:
    """Emit the ``Serialize`` / ``Deserialize`` methods of ``shape``'s variants.

    Returns:
        bool: True if the methods were written by this call.
    """
    namespace = ctx.types_namespace
    if not ctx.claim("variants", namespace, shape.id):
        return False
    _emit(ctx, shape, namespace, (UnionVariantSerializer(ctx, shape), UnionVariantDeserializer(ctx, shape)))
    ensure_helpers(ctx, shape, namespace)
    return True


def write_serde(ctx: CodegenContext, shape: Shape) -> bool:
    """Emit the serde code owned by ``shape``.

    Structures get their methods; unions get their variant methods. A list, set
    or map gets its helpers in the types package, unless a structure or union
    emitted earlier in the pass already needed them. Emit collections last.

    Returns:
        bool: True if code was written for ``shape``.

    Raises:
        UnsupportedShapeError: If a member of ``shape`` cannot be encoded.
    """
    if is_prelude_shape(shape.id):
        return False
    match shape.type:
        case ShapeType.STRUCTURE:
            symbol = ctx.symbol_provider.to_symbol(shape)
            namespace = ctx.delegator.resolve_namespace(symbol.namespace)
            if not ctx.claim("serde", namespace, shape.id):
                return False
            _emit(ctx, shape, namespace, serde_generators_for(ctx, shape))
            ensure_helpers(ctx, shape, namespace)
            return True
        case ShapeType.UNION:
            return write_union_variants(ctx, shape)
        case ShapeType.LIST | ShapeType.SET | ShapeType.MAP:
            if ctx.is_claimed("serde", shape.id):
                return False
            return _emit_helpers(ctx, shape, ctx.types_namespace)
        case _:
            return False


__all__ = [
    "ensure_helpers",
    "serde_generators_for",
    "write_serde",
    "write_union_variants",
]
