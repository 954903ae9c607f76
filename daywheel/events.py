from enum import Enum, auto
from typing import Callable, Dict, Any, Optional
import inspect
import logging
import threading
import uuid
import weakref

logger = logging.getLogger(__name__)


class AppEvent(Enum):
    """Notifications published by the timeline engine."""
    LAYOUT_REBUILT = auto()
    SELECTION_CHANGED = auto()
    SLEEP_TAPPED = auto()
    DATE_CHANGED = auto()


class Subscription:
    """Handle returned by ``EventBus.subscribe``.

    With a strong subscription this object owns the callback: keep it
    around and call ``unsubscribe()`` when done.
    """

    def __init__(
        self,
        event_bus: "EventBus",
        event: AppEvent,
        subscription_id: str,
        strong_ref: Optional[Callable[[Any], None]] = None,
    ):
        self._event_bus = event_bus
        self._event = event
        self._subscription_id = subscription_id
        self._active = True
        self._strong_ref = strong_ref

    @property
    def id(self) -> str:
        return self._subscription_id

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if self._active:
            self._event_bus._remove(self._event, self._subscription_id)
            self._active = False
            self._strong_ref = None


def _weak_callback(callback: Callable[[Any], None], on_dead: Callable[[Any], None]) -> Callable[[], Any]:
    """Weak handle to ``callback``; builtins that refuse weakrefs are held strongly."""
    if inspect.ismethod(callback):
        return weakref.WeakMethod(callback, on_dead)
    try:
        return weakref.ref(callback, on_dead)
    except TypeError:
        return lambda: callback


class EventBus:
    """Process-wide bus decoupling the engine from its front-ends.

    Bound-method subscribers are held weakly so a destroyed control drops
    out on its own; lambdas and closures are held strongly through their
    ``Subscription``.
    """
    _instance: Optional["EventBus"] = None
    _instance_lock = threading.Lock()

    def __new__(cls) -> "EventBus":
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._listeners: Dict[AppEvent, Dict[str, Callable[[], Any]]] = {}
        return cls._instance

    def subscribe(
        self,
        event: AppEvent,
        callback: Callable[[Any], None],
        strong: bool = False,
    ) -> Subscription:
        listeners = self._listeners.setdefault(event, {})
        subscription_id = str(uuid.uuid4())

        is_lambda = getattr(callback, "__name__", "") == "<lambda>"
        is_closure = not inspect.ismethod(callback) and getattr(callback, "__closure__", None) is not None
        if (is_lambda or is_closure) and not strong:
            logger.debug(f"EventBus: holding {event.name} subscriber strongly ({callback!r})")
            strong = True

        def on_dead(_ref) -> None:
            logger.debug(f"EventBus: subscriber to {event.name} was garbage collected")
            self._remove(event, subscription_id)

        listeners[subscription_id] = _weak_callback(callback, on_dead)
        return Subscription(self, event, subscription_id, strong_ref=callback if strong else None)

    def _remove(self, event: AppEvent, subscription_id: str) -> None:
        listeners = self._listeners.get(event)
        if listeners is not None:
            listeners.pop(subscription_id, None)

    def unsubscribe(self, event: AppEvent, callback: Callable[[Any], None]) -> None:
        listeners = self._listeners.get(event, {})
        for sub_id, ref in list(listeners.items()):
            target = ref()
            if target is None or target == callback:
                del listeners[sub_id]

    def emit(self, event: AppEvent, data: Any = None) -> None:
        """Call every live subscriber; a failing subscriber is logged and skipped."""
        listeners = self._listeners.get(event)
        if not listeners:
            return
        for sub_id, ref in list(listeners.items()):
            callback = ref()
            if callback is None:
                listeners.pop(sub_id, None)
                continue
            try:
                callback(data)
            except Exception as e:
                logger.error(f"Error in event handler for {event.name}: {e}")

    def clear(self) -> None:
        """Drop every subscription. Used by tests."""
        self._listeners.clear()

    @classmethod
    def reset_instance(cls) -> None:
        if cls._instance is not None:
            cls._instance._listeners.clear()
            cls._instance = None


event_bus = EventBus()
