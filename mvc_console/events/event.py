"""MVC 生命周期事件。"""

from __future__ import annotations

from typing import Any, Dict, Optional


EVENT_DISPATCH_ERROR = "dispatch.error"
EVENT_RENDER_ERROR = "render.error"


class ErrorCode:
    """宿主应用写入 MvcEvent.error 的错误码。"""

    EXCEPTION = "error-exception"
    CONTROLLER_NOT_FOUND = "error-controller-not-found"
    CONTROLLER_INVALID = "error-controller-invalid"
    ROUTER_NO_MATCH = "error-router-no-match"

    # 由 route-not-found 策略负责处理的错误码
    NOT_FOUND = (CONTROLLER_NOT_FOUND, CONTROLLER_INVALID, ROUTER_NO_MATCH)


class MvcEvent:
    """在 EventManager 上传递的事件对象。

    - error: 错误码，为空表示没有错误。
    - result: 监听器产出的结果（视图模型或响应）。
    - params: 任意参数，例如 "exception"。
    """

    def __init__(
        self,
        name: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.name = name
        self.params: Dict[str, Any] = dict(params or {})
        self._error: Optional[str] = None
        self._result: Any = None
        self._propagation_stopped = False

    def get_error(self) -> Optional[str]:
        return self._error

    def set_error(self, error: Optional[str]) -> "MvcEvent":
        self._error = error
        return self

    def is_error(self) -> bool:
        return bool(self._error)

    def get_result(self) -> Any:
        return self._result

    def set_result(self, result: Any) -> "MvcEvent":
        self._result = result
        return self

    def get_param(self, name: str, default: Any = None) -> Any:
        return self.params.get(name, default)

    def set_param(self, name: str, value: Any) -> "MvcEvent":
        self.params[name] = value
        return self

    def stop_propagation(self, flag: bool = True) -> None:
        self._propagation_stopped = flag

    @property
    def propagation_stopped(self) -> bool:
        return self._propagation_stopped
