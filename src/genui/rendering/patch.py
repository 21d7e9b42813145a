"""
JSON Patch Engine
Applies add/remove/replace/copy/move operations to a canonical tree.

Application is best-effort: operations run in order on a copy of the
tree, and an operation that fails is logged and skipped while the rest
still apply. Each operation works on its own copy, so a skipped
operation leaves no partial changes behind.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from genui.core import get_logger
from genui.monitoring import metrics_collector
from genui.schema import UINode

logger = get_logger(__name__)

APPEND = "-"


class PatchError(Exception):
    """A single patch operation could not be applied."""

    pass


class PatchOperation(BaseModel):
    """One JSON-Patch-style operation."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    op: str
    path: str = ""
    value: Any = None
    from_: str | None = Field(default=None, alias="from")


@dataclass(frozen=True)
class PatchFailure:
    """An operation that was skipped."""

    index: int
    op: str
    path: str
    error: str


@dataclass
class PatchResult:
    """Patched document plus a record of skipped operations."""

    tree: Any
    applied: int = 0
    skipped: list[PatchFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.skipped


def parse_path(path: str) -> list[str]:
    """Split a ``/``-delimited path, dropping empty segments."""
    return [
        part.replace("~1", "/").replace("~0", "~")
        for part in path.split("/")
        if part != ""
    ]


def clone(value: Any) -> Any:
    """Deep copy of the JSON structure; non-JSON leaves are shared."""
    if isinstance(value, dict):
        return {k: clone(v) for k, v in value.items()}
    if isinstance(value, list):
        return [clone(v) for v in value]
    return value


def _is_index(segment: str) -> bool:
    return segment.lstrip("-").isdigit()


def _to_index(segment: str) -> int:
    try:
        return int(segment)
    except ValueError:
        raise PatchError(f"Invalid array index '{segment}'") from None


def _existing_index(container: list, segment: str) -> int:
    index = _to_index(segment)
    if not 0 <= index < len(container):
        raise PatchError(f"Array index {index} out of range (length {len(container)})")
    return index


def _get(container: Any, segment: str) -> Any:
    if isinstance(container, list):
        return container[_existing_index(container, segment)]
    if isinstance(container, dict):
        if segment not in container:
            raise PatchError(f"Path segment '{segment}' not found")
        return container[segment]
    raise PatchError(f"Cannot traverse into {type(container).__name__} at '{segment}'")


def _resolve(doc: Any, parts: list[str]) -> Any:
    current = doc
    for part in parts:
        current = _get(current, part)
    return current


def _ensure_child(container: Any, segment: str, next_segment: str) -> Any:
    """Return the child at ``segment``, creating it when missing."""
    if isinstance(container, dict):
        child = container.get(segment)
        if child is None:
            child = [] if _is_index(next_segment) else {}
            container[segment] = child
        return child

    if isinstance(container, list):
        index = _to_index(segment)
        if 0 <= index < len(container) and container[index] is not None:
            return container[index]
        child = [] if _is_index(next_segment) else {}
        if 0 <= index < len(container):
            container[index] = child
        elif index == len(container):
            container.append(child)
        else:
            raise PatchError(f"Array index {index} out of range (length {len(container)})")
        return child

    raise PatchError(f"Cannot create path below {type(container).__name__} at '{segment}'")


def add(doc: Any, path: str, value: Any) -> Any:
    parts = parse_path(path)
    if not parts:
        return value

    current = doc
    for i, part in enumerate(parts[:-1]):
        current = _ensure_child(current, part, parts[i + 1])

    last = parts[-1]
    if isinstance(current, list):
        if last == APPEND:
            current.append(value)
        else:
            current.insert(_to_index(last), value)
    elif isinstance(current, dict):
        current[last] = value
    else:
        raise PatchError(f"Cannot add to {type(current).__name__} at '{path}'")
    return doc


def remove(doc: Any, path: str) -> Any:
    parts = parse_path(path)
    if not parts:
        raise PatchError("Cannot remove the document root")

    parent = _resolve(doc, parts[:-1])
    last = parts[-1]
    if isinstance(parent, list):
        del parent[_existing_index(parent, last)]
    elif isinstance(parent, dict):
        parent.pop(last, None)
    else:
        raise PatchError(f"Cannot remove from {type(parent).__name__} at '{path}'")
    return doc


def replace(doc: Any, path: str, value: Any) -> Any:
    parts = parse_path(path)
    if not parts:
        return value

    parent = _resolve(doc, parts[:-1])
    last = parts[-1]
    if isinstance(parent, list):
        parent[_existing_index(parent, last)] = value
    elif isinstance(parent, dict):
        parent[last] = value
    else:
        raise PatchError(f"Cannot replace in {type(parent).__name__} at '{path}'")
    return doc


def copy(doc: Any, path: str, from_path: str) -> Any:
    source = _resolve(doc, parse_path(from_path))
    return add(doc, path, clone(source))


def move(doc: Any, path: str, from_path: str) -> Any:
    """
    Move the value at ``from_path`` to ``path``.

    The source is removed first; ``path`` is resolved against the tree
    after that removal, so array indices after the source have shifted.
    """
    from_parts = parse_path(from_path)
    to_parts = parse_path(path)
    if len(to_parts) > len(from_parts) and to_parts[:len(from_parts)] == from_parts:
        raise PatchError(f"Cannot move '{from_path}' into its own child '{path}'")

    value = clone(_resolve(doc, from_parts))
    doc = remove(doc, from_path)
    return add(doc, path, value)


def _require_from(operation: PatchOperation) -> str:
    if operation.from_ is None:
        raise PatchError(f"'{operation.op}' requires a 'from' path")
    return operation.from_


_HANDLERS: dict[str, Callable[[Any, PatchOperation], Any]] = {
    "add": lambda doc, o: add(doc, o.path, clone(o.value)),
    "remove": lambda doc, o: remove(doc, o.path),
    "replace": lambda doc, o: replace(doc, o.path, clone(o.value)),
    "copy": lambda doc, o: copy(doc, o.path, _require_from(o)),
    "move": lambda doc, o: move(doc, o.path, _require_from(o)),
}


class JsonPatchEngine:
    """Applies ordered patch lists to canonical trees."""

    def apply(self, tree: UINode | dict[str, Any], patches: Iterable[Any]) -> PatchResult:
        """
        Apply ``patches`` in order to a copy of ``tree``.

        Args:
            tree: Canonical node or its dict form; never mutated
            patches: PatchOperation models or plain ``{op, path, value, from}`` dicts

        Returns:
            PatchResult holding the new dict tree and any skipped operations
        """
        doc = tree.to_dict() if isinstance(tree, UINode) else tree
        doc = clone(doc)
        result = PatchResult(tree=doc)

        for index, raw in enumerate(patches):
            op = raw.get("op") if isinstance(raw, dict) else getattr(raw, "op", None)
            path = raw.get("path") if isinstance(raw, dict) else getattr(raw, "path", None)
            try:
                operation = raw if isinstance(raw, PatchOperation) else PatchOperation.model_validate(raw)
                handler = _HANDLERS.get(operation.op)
                if handler is None:
                    logger.warning("patch_operation_unknown", op=operation.op, path=operation.path)
                    raise PatchError(f"Unknown JSON Patch operation: {operation.op}")
                result.tree = handler(clone(result.tree), operation)
                result.applied += 1
                metrics_collector.record_patch_operation(operation.op, "applied")
            except (PatchError, ValidationError) as e:
                logger.error("patch_operation_failed", index=index, op=op, path=path, error=str(e))
                result.skipped.append(PatchFailure(index, str(op), str(path), str(e)))
                metrics_collector.record_patch_operation(str(op), "skipped")

        return result


def apply_json_patch(tree: UINode | dict[str, Any], patches: Iterable[Any]) -> dict[str, Any]:
    """
    Convenience function returning only the patched tree

    Args:
        tree: Canonical tree
        patches: Ordered operations

    Returns:
        New dict tree
    """
    return JsonPatchEngine().apply(tree, patches).tree
