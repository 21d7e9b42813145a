"""
Tree Renderer
Recursively instantiates canonical nodes into live component instances.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from pydantic import ValidationError

from genui.components import ComponentRegistry, ViewHost
from genui.core import Settings, get_logger, get_settings, loads, safe_json_dumps, trace_operation
from genui.monitoring import metrics_collector
from genui.schema import UINode
from .validator import SchemaValidator

logger = get_logger(__name__)


class RenderError(Exception):
    """A node could not be instantiated."""

    pass


@dataclass
class RenderResult:
    """
    Outcome of rendering one node.

    A failed child leaves ``error`` on its own result; ancestors still
    succeed with that subtree marked failed.
    """

    component: Any = None
    schema: Optional[UINode] = None
    error: Optional[str] = None
    children: list["RenderResult"] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def child_components(self) -> list[Any]:
        return [child.component for child in self.children if child.component is not None]

    def collect_errors(self) -> list[str]:
        """Errors of this node and every descendant, depth first."""
        errors = [self.error] if self.error else []
        for child in self.children:
            errors.extend(child.collect_errors())
        return errors


def resolve_handler(handler: Any) -> Optional[Callable[[Any], Any]]:
    """
    Resolve an event binding to a plain callable.

    Preference order: a callable, an object with ``next(data)``, an
    object with ``emit(data)``.
    """
    if callable(handler):
        return handler
    for method in ("next", "emit"):
        bound = getattr(handler, method, None)
        if callable(bound):
            return bound
    return None


def _as_node(node: UINode | dict[str, Any]) -> UINode:
    return node if isinstance(node, UINode) else UINode.model_validate(node)


def _rejected(error: ValidationError) -> RenderResult:
    logger.error("render_node_rejected", errors=error.error_count(), error=str(error))
    return RenderResult(error=f"Invalid schema node: {error}")


def _render_status(result: Optional[RenderResult]) -> str:
    if result is None or result.error:
        return "error"
    return "partial" if result.collect_errors() else "success"


class SchemaRenderer:
    """
    Renders UINode trees into ViewHost mount points.

    Rendering never raises past ``render``: failures become
    ``RenderResult.error`` on the node where they happened.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        validator: Optional[SchemaValidator] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.registry = registry
        self.validator = validator or SchemaValidator(registry)
        self.settings = settings or get_settings()
        self._version_warned = False

    def render(self, node: UINode | dict[str, Any], host: Optional[ViewHost]) -> RenderResult:
        """
        Render ``node`` and its subtree into ``host``.

        Args:
            node: Canonical node (or its dict form)
            host: Mount point the root instance is created in

        Returns:
            RenderResult tree mirroring the rendered nodes
        """
        result = None
        with metrics_collector.measure_duration(
            lambda seconds: metrics_collector.record_render(_render_status(result), seconds)
        ):
            result = self._render_root(node, host)
        return result

    def _render_root(self, node: UINode | dict[str, Any], host: Optional[ViewHost]) -> RenderResult:
        try:
            node = _as_node(node)
        except ValidationError as e:
            return _rejected(e)

        with trace_operation("render", type=node.type) as extra:
            result = self._render_node(node, host)
            extra["errors"] = len(result.collect_errors())
        return result

    def mount(self, node: UINode | dict[str, Any], host: ViewHost) -> RenderResult:
        """Clear ``host`` and render ``node`` into it."""
        if host is not None:
            host.clear()
        return self.render(node, host)

    def replace_children(
        self,
        target: Any,
        target_type: str,
        children: Iterable[UINode | dict[str, Any]],
    ) -> list[RenderResult]:
        """
        Replace the children of a live container instance.

        Args:
            target: Rendered container instance
            target_type: Registered type of ``target``
            children: New child nodes

        Returns:
            Results for the new children; empty when ``target`` has no mount point
        """
        capability = self.registry.get_capability(target_type)
        if capability is None or not capability.is_container:
            logger.warning("replace_children_not_container", type=target_type)
            return []

        host_name = capability.host_property()
        host = getattr(target, host_name, None)
        if host is None:
            target.detect_changes()
            host = getattr(target, host_name, None)
        if host is None:
            logger.warning("replace_children_no_host", type=target_type, host=host_name)
            return []

        host.clear()
        results = []
        for child in children:
            try:
                node = _as_node(child)
            except ValidationError as e:
                results.append(_rejected(e))
                continue
            results.append(self._render_child(node, host))
        target.detect_changes()
        logger.debug("children_replaced", type=target_type, count=len(results))
        return results

    def _render_node(self, node: UINode, host: Optional[ViewHost]) -> RenderResult:
        try:
            component = self._instantiate(node, host)
        except RenderError as e:
            logger.error("render_failed", type=node.type, error=str(e))
            return RenderResult(schema=node, error=str(e))

        result = RenderResult(component=component, schema=node)
        try:
            self._bind_props(component, node.props)
            self._bind_events(component, node, result)

            # Child mount points exist only after the first refresh
            component.detect_changes()
            if node.children:
                self._render_children(component, node, result)
            component.detect_changes()
        except Exception as e:
            logger.error("render_failed", type=node.type, error=str(e), exc_type=type(e).__name__)
            result.error = f"Failed to render component '{node.type}': {e}"

        return result

    def _instantiate(self, node: UINode, host: Optional[ViewHost]) -> Any:
        if not node.type:
            raise RenderError("Schema missing type property")
        if host is None:
            raise RenderError(f"No mount target for component '{node.type}'")

        entry = self.registry.get(node.type)
        if entry is None:
            raise RenderError(f"Component type '{node.type}' not registered")

        self._check_version(node)
        try:
            return host.create_component(entry.factory)
        except Exception as e:
            raise RenderError(f"Failed to create component '{node.type}': {e}") from e

    def _check_version(self, node: UINode) -> None:
        version = node.renderer_version
        if version and version != self.settings.renderer_version and not self._version_warned:
            self._version_warned = True
            logger.warning(
                "renderer_version_mismatch",
                schema_version=version,
                renderer_version=self.settings.renderer_version,
            )

    def _bind_props(self, component: Any, props: dict[str, Any]) -> None:
        set_input = getattr(component, "set_input", None)
        for name, value in props.items():
            if callable(set_input):
                set_input(name, value)
            else:
                setattr(component, name, value)

    def _bind_events(self, component: Any, node: UINode, result: RenderResult) -> None:
        for event_name, handler in node.events.items():
            dispatch = resolve_handler(handler)
            if dispatch is None:
                message = f"Handler for '{event_name}' on '{node.type}' is not callable"
                logger.warning("event_handler_unbindable", type=node.type, event_name=event_name)
                result.warnings.append(message)
                continue

            output = getattr(component, event_name, None)
            if output is None or not callable(getattr(output, "subscribe", None)):
                message = f"Component '{node.type}' has no '{event_name}' output"
                logger.warning("event_output_missing", type=node.type, event_name=event_name)
                result.warnings.append(message)
                continue

            subscription = output.subscribe(dispatch)
            track = getattr(component, "track", None)
            if callable(track):
                track(subscription)

    def _child_hosts(self, component: Any, node: UINode) -> tuple[list[Any], bool]:
        """Mount points for children and whether they are distributed one per host."""
        capability = self.registry.get_capability(node.type)
        if capability is None or not capability.is_container:
            return [], False

        get_child_containers = getattr(component, "get_child_containers", None)
        if callable(get_child_containers):
            hosts = list(get_child_containers())
            if not hosts:
                component.detect_changes()
                hosts = list(get_child_containers())
            if hosts:
                return hosts, True

        host = getattr(component, capability.host_property(), None)
        return ([host], False) if host is not None else ([], False)

    def _render_children(self, component: Any, node: UINode, result: RenderResult) -> None:
        hosts, distribute = self._child_hosts(component, node)
        if not hosts:
            message = f"Component '{node.type}' cannot host children; {len(node.children)} not rendered"
            logger.warning("children_not_rendered", type=node.type, children=len(node.children))
            result.warnings.append(message)
            return

        for index, child in enumerate(node.children):
            if not distribute:
                result.children.append(self._render_child(child, hosts[0]))
            elif index < len(hosts):
                result.children.append(self._render_child(child, hosts[index]))
            else:
                message = f"Child {index} of '{node.type}' has no container"
                logger.warning("child_container_missing", type=node.type, index=index, containers=len(hosts))
                result.warnings.append(message)

    def _render_child(self, child: UINode, host: Any) -> RenderResult:
        if self.settings.validate_children:
            report = self.validator.validate(child)
            if not report.valid:
                metrics_collector.record_validation_failure(child.type)
                logger.warning("child_validation_failed", type=child.type, errors=list(report.errors))
                return RenderResult(schema=child, error=report.summary())
        return self._render_node(child, host)


def schema_to_json(node: UINode, indent: int = 0) -> str:
    """Serialize a canonical tree to JSON."""
    return safe_json_dumps(node.to_dict(), indent=indent)


def json_to_schema(text: str | bytes) -> UINode:
    """
    Parse JSON into a canonical tree

    Raises:
        JSONParseError: Invalid JSON
        pydantic.ValidationError: JSON is not a node
    """
    return UINode.model_validate(loads(text))
