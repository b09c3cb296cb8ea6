"""mvc_console 顶层包。

为 MVC 应用提供控制台（非 HTTP）运行支持：
检测控制台环境并替换 Response 服务，以及把
dispatch/render 阶段的异常渲染为控制台文本。
"""

from mvc_console.service import ConsoleResponseDelegatorFactory, is_console, select_response
from mvc_console.view import ConsoleModel, ExceptionStrategy

__all__ = [
    "ConsoleModel",
    "ConsoleResponseDelegatorFactory",
    "ExceptionStrategy",
    "is_console",
    "select_response",
]
