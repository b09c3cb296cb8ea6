"""进程内事件管理器。

只实现 ExceptionStrategy 需要的最小接口：attach / detach / trigger。
每次 attach 返回一个 ListenerHandle，调用方持有句柄以便之后精确解绑。
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from mvc_console.domain.exceptions import ListenerError
from .event import MvcEvent


Listener = Callable[[MvcEvent], Any]


@dataclass(eq=False)
class ListenerHandle:
    """一次订阅的句柄。"""

    event_name: str
    listener: Listener
    priority: int
    sequence: int
    owner_id: int = field(repr=False)


class EventManager:
    """按优先级分发事件的发布/订阅管理器。"""

    def __init__(self) -> None:
        self._listeners: Dict[str, List[ListenerHandle]] = {}
        self._lock = threading.Lock()
        self._sequence = itertools.count()

    def attach(self, event_name: str, listener: Listener, priority: int = 1) -> ListenerHandle:
        handle = ListenerHandle(
            event_name=event_name,
            listener=listener,
            priority=priority,
            sequence=next(self._sequence),
            owner_id=id(self),
        )
        with self._lock:
            self._listeners.setdefault(event_name, []).append(handle)
        return handle

    def issued(self, handle: ListenerHandle) -> bool:
        """句柄是否由本管理器签发。"""

        return handle.owner_id == id(self)

    def detach(self, handle: ListenerHandle) -> bool:
        """解绑句柄；句柄已解绑时返回 False。"""

        if not self.issued(handle):
            raise ListenerError(
                code="LISTENER_FOREIGN_HANDLE",
                message=f"Handle for {handle.event_name!r} was not issued by this event manager",
                event=handle.event_name,
            )
        with self._lock:
            handles = self._listeners.get(handle.event_name, [])
            for idx, existing in enumerate(handles):
                if existing is handle:
                    del handles[idx]
                    if not handles:
                        self._listeners.pop(handle.event_name, None)
                    return True
        return False

    def listeners(self, event_name: str) -> List[ListenerHandle]:
        with self._lock:
            handles = list(self._listeners.get(event_name, []))
        # 优先级高的先执行，同优先级按注册顺序
        handles.sort(key=lambda h: (-h.priority, h.sequence))
        return handles

    def trigger(self, event_name: str, event: MvcEvent) -> List[Any]:
        """触发事件，返回各监听器的返回值。

        执行的是触发时刻的监听器快照；监听器可以通过
        ``event.stop_propagation()`` 阻止后续监听器执行。
        """

        event.name = event_name
        responses: List[Any] = []
        for handle in self.listeners(event_name):
            responses.append(handle.listener(event))
            if event.propagation_stopped:
                break
        return responses
