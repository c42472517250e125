"""
contentmodel.events  ──  Decorators for ContentModel lifecycle hooks
"""

from __future__ import annotations
from typing import Callable, Type, Dict, TYPE_CHECKING
from collections import defaultdict
import logging

if TYPE_CHECKING:
    from .core.record import ContentModel

logger = logging.getLogger(__name__)

EVENT_TYPES = ("create", "update", "delete")


class EventRegistry:
    """Central registry for event handlers"""

    def __init__(self):
        # Maps event type -> class name -> handlers (kept in registration order)
        self._handlers: Dict[str, Dict[str, Dict[Callable, None]]] = {
            event: defaultdict(dict) for event in EVENT_TYPES
        }

    def register(
        self,
        event_type: str,
        model_classes: tuple[Type[ContentModel], ...],
        handler: Callable,
    ) -> None:
        """Register a handler for specific model classes"""
        for cls in model_classes:
            self._handlers[event_type][cls.__name__][handler] = None

    def unregister(self, handler: Callable) -> None:
        for by_class in self._handlers.values():
            for handlers in by_class.values():
                handlers.pop(handler, None)

    def emit(self, event_type: str, instance: ContentModel) -> None:
        """Emit event to every handler registered on the instance's class or a base"""
        handlers: Dict[Callable, None] = {}

        for cls in instance.__class__.__mro__:
            handlers.update(self._handlers[event_type].get(cls.__name__, {}))

        if handlers:
            logger.debug(
                "%s %s -> %d handler(s)", event_type, instance.type, len(handlers)
            )
        for handler in handlers:
            handler(instance)


# Global registry instance
_registry = EventRegistry()


class OnDecorator:
    """Namespace for event decorators"""

    @staticmethod
    def _hook(event_type: str, model_classes: tuple) -> Callable:
        def decorator(func: Callable) -> Callable:
            _registry.register(event_type, model_classes, func)
            return func

        return decorator

    def create(self, *model_classes: Type[ContentModel]) -> Callable:
        """Decorator for handling record creation events"""
        return self._hook("create", model_classes)

    def update(self, *model_classes: Type[ContentModel]) -> Callable:
        """Decorator for handling record update events"""
        return self._hook("update", model_classes)

    def delete(self, *model_classes: Type[ContentModel]) -> Callable:
        """Decorator for handling record deletion events"""
        return self._hook("delete", model_classes)


# Export the decorator interface
on = OnDecorator()


def emit(event_type: str, instance: ContentModel) -> None:
    _registry.emit(event_type, instance)


def unregister(handler: Callable) -> None:
    """Drop ``handler`` from every event it was registered for."""
    _registry.unregister(handler)
