"""响应对象模型。

- ResponseInterface: 响应对象的最小能力协议（结构化类型，而非具体类）。
- Message: content + metadata 的通用实现。
- ConsoleResponse: 控制台环境下使用的响应，携带 error_level。
- HttpResponse: 普通 HTTP 环境下的默认响应，携带状态码。

"是否已经是响应对象" 的判断一律使用 ``isinstance(x, ResponseInterface)``，
只要对象暴露了这四个方法即视为响应。
"""

import sys
from typing import Any, Dict, Mapping, Optional, Protocol, TextIO, Union, runtime_checkable


@runtime_checkable
class ResponseInterface(Protocol):
    """响应对象协议。"""

    def get_content(self) -> Any:
        ...

    def set_content(self, value: Any) -> Any:
        ...

    def get_metadata(self, key: Optional[str] = None, default: Any = None) -> Any:
        ...

    def set_metadata(self, spec: Union[str, Mapping[str, Any]], value: Any = None) -> Any:
        ...


class Message:
    """带 metadata 的消息体。"""

    def __init__(self, content: Any = "") -> None:
        self._content = content
        self._metadata: Dict[str, Any] = {}

    def get_content(self) -> Any:
        return self._content

    def set_content(self, value: Any) -> "Message":
        self._content = value
        return self

    def get_metadata(self, key: Optional[str] = None, default: Any = None) -> Any:
        """key 为空时返回全部 metadata 的副本。"""

        if key is None:
            return dict(self._metadata)
        return self._metadata.get(key, default)

    def set_metadata(self, spec: Union[str, Mapping[str, Any]], value: Any = None) -> "Message":
        """设置单个 key，或用映射批量更新。"""

        if isinstance(spec, Mapping):
            self._metadata.update(spec)
        else:
            self._metadata[spec] = value
        return self


class ConsoleResponse(Message):
    """控制台响应。

    error_level 会被宿主用作进程退出码；content 只会被发送一次。
    """

    def __init__(self, content: Any = "", error_level: int = 0) -> None:
        super().__init__(content)
        self._error_level = int(error_level)
        self._content_sent = False

    def get_error_level(self) -> int:
        return self._error_level

    def set_error_level(self, error_level: int) -> "ConsoleResponse":
        self._error_level = int(error_level)
        return self

    @property
    def content_sent(self) -> bool:
        return self._content_sent

    def send(self, stream: Optional[TextIO] = None) -> "ConsoleResponse":
        if self._content_sent:
            return self
        out = stream or sys.stdout
        out.write(str(self._content or ""))
        out.flush()
        self._content_sent = True
        return self


class HttpResponse(Message):
    """HTTP 响应（非控制台环境下的默认响应）。"""

    def __init__(self, content: Any = "", status_code: int = 200) -> None:
        super().__init__(content)
        self._status_code = int(status_code)

    def get_status_code(self) -> int:
        return self._status_code

    def set_status_code(self, status_code: int) -> "HttpResponse":
        self._status_code = int(status_code)
        return self
