"""服务层：控制台环境检测与 Response 委托工厂。"""

from .environment import is_console, override_console, reset_console
from .response_factory import ConsoleResponseDelegatorFactory, select_response

__all__ = [
    "ConsoleResponseDelegatorFactory",
    "is_console",
    "override_console",
    "reset_console",
    "select_response",
]
