from abc import ABC, abstractmethod
from typing import List

from .manager import EventManager, ListenerHandle


class ListenerAggregate(ABC):
    """一组监听器的聚合。

    子类在 attach() 中把 EventManager.attach 返回的句柄追加到
    ``self.listeners``；detach() 只解绑这些句柄。
    """

    def __init__(self) -> None:
        self.listeners: List[ListenerHandle] = []

    @abstractmethod
    def attach(self, events: EventManager, priority: int = 1) -> None:
        ...

    def detach(self, events: EventManager) -> None:
        """只解绑由 events 签发的句柄，其他 EventManager 上的订阅保留。"""

        kept: List[ListenerHandle] = []
        for handle in self.listeners:
            if events.issued(handle):
                events.detach(handle)
            else:
                kept.append(handle)
        self.listeners[:] = kept
