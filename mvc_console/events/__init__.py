"""事件层：MvcEvent、错误码、EventManager 与监听器聚合。"""

from .aggregate import ListenerAggregate
from .event import EVENT_DISPATCH_ERROR, EVENT_RENDER_ERROR, ErrorCode, MvcEvent
from .manager import EventManager, ListenerHandle

__all__ = [
    "EVENT_DISPATCH_ERROR",
    "EVENT_RENDER_ERROR",
    "ErrorCode",
    "EventManager",
    "ListenerAggregate",
    "ListenerHandle",
    "MvcEvent",
]
