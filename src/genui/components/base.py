"""
Host Runtime Primitives
Minimal live-instance model the renderer drives: mount points, event
outputs and components with inputs and change detection.
"""

from typing import Any, Callable, ClassVar


class Subscription:
    """Handle returned by EventEmitter.subscribe()."""

    def __init__(self, emitter: "EventEmitter", callback: Callable[[Any], None]) -> None:
        self._emitter = emitter
        self._callback = callback
        self.closed = False

    def unsubscribe(self) -> None:
        if not self.closed:
            self._emitter._listeners.remove(self._callback)
            self.closed = True


class EventEmitter:
    """Observable output of a component instance."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._listeners: list[Callable[[Any], None]] = []

    def subscribe(self, callback: Callable[[Any], None]) -> Subscription:
        self._listeners.append(callback)
        return Subscription(self, callback)

    def emit(self, data: Any = None) -> None:
        for listener in list(self._listeners):
            listener(data)

    @property
    def observers(self) -> int:
        return len(self._listeners)


class ViewHost:
    """
    Mount point for live component instances.

    Instances are created into a host in order and destroyed together
    when the host is cleared.
    """

    def __init__(self, name: str = "root") -> None:
        self.name = name
        self.instances: list["BaseComponent"] = []

    def create_component(self, factory: Callable[[], "BaseComponent"]) -> "BaseComponent":
        instance = factory()
        instance.host = self
        self.instances.append(instance)
        return instance

    def clear(self) -> None:
        for instance in self.instances:
            instance.destroy()
        self.instances.clear()

    def __len__(self) -> int:
        return len(self.instances)

    def __repr__(self) -> str:
        return f"ViewHost({self.name!r}, instances={len(self.instances)})"


class BaseComponent:
    """
    Live instance of a registered component type.

    Inputs are set through set_input(); outputs are EventEmitter
    attributes named in ``outputs``.
    """

    outputs: ClassVar[tuple[str, ...]] = ()

    def __init__(self, component_type: str, outputs: tuple[str, ...] | None = None) -> None:
        self.component_type = component_type
        self.inputs: dict[str, Any] = {}
        self.host: ViewHost | None = None
        self.check_count = 0
        self.destroyed = False
        self.subscriptions: list[Subscription] = []
        for name in outputs if outputs is not None else self.outputs:
            setattr(self, name, EventEmitter(name))

    def set_input(self, name: str, value: Any) -> None:
        self.inputs[name] = value

    def detect_changes(self) -> None:
        """Synchronously refresh the instance view."""
        if self.destroyed:
            raise RuntimeError(f"Component '{self.component_type}' used after destroy")
        self.check_count += 1

    def track(self, subscription: Subscription) -> None:
        """Keep an output subscription to release on destroy."""
        self.subscriptions.append(subscription)

    def destroy(self) -> None:
        for subscription in self.subscriptions:
            subscription.unsubscribe()
        self.subscriptions.clear()
        self.destroyed = True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.component_type!r})"


class ContainerComponent(BaseComponent):
    """Component that exposes a child mount point once its view exists."""

    def __init__(
        self,
        component_type: str,
        content_host: str = "contentHost",
        outputs: tuple[str, ...] | None = None,
    ) -> None:
        super().__init__(component_type, outputs)
        self.content_host = content_host
        # Mount point appears on first change detection, like a view query
        setattr(self, content_host, None)

    def detect_changes(self) -> None:
        super().detect_changes()
        if getattr(self, self.content_host) is None:
            setattr(self, self.content_host, ViewHost(f"{self.component_type}.{self.content_host}"))

    def destroy(self) -> None:
        host = getattr(self, self.content_host, None)
        if host is not None:
            host.clear()
        super().destroy()


class TabsComponent(ContainerComponent):
    """Container that distributes children across one host per tab."""

    def __init__(
        self,
        component_type: str = "tabs",
        content_host: str = "tabsHost",
        outputs: tuple[str, ...] | None = None,
    ) -> None:
        super().__init__(component_type, content_host, outputs)
        self.panel_hosts: list[ViewHost] = []

    def detect_changes(self) -> None:
        super().detect_changes()
        tabs = self.inputs.get("tabs") or []
        while len(self.panel_hosts) < len(tabs):
            self.panel_hosts.append(ViewHost(f"tabs.panel{len(self.panel_hosts)}"))

    def get_child_containers(self) -> list[ViewHost]:
        return list(self.panel_hosts)

    def destroy(self) -> None:
        for host in self.panel_hosts:
            host.clear()
        super().destroy()
