"""Response 服务的委托工厂。

检测到控制台环境时返回 ConsoleResponse，否则透传默认工厂的结果。
"""

from typing import Any, Callable, Mapping, Optional, TypeVar

from mvc_console.domain.responses import ConsoleResponse
from mvc_console.infrastructure.logging.logger import logger
from .environment import is_console


R = TypeVar("R")


def select_response(
    is_console_environment: bool,
    default_factory: Callable[[], R],
) -> "R | ConsoleResponse":
    """根据环境选择响应对象。

    控制台环境下直接构造 ConsoleResponse，default_factory 不会被调用；
    否则调用一次 default_factory 并原样返回其结果。
    """

    if not is_console_environment:
        logger.debug("response_selector.default")
        return default_factory()
    logger.debug("response_selector.console")
    return ConsoleResponse()


class ConsoleResponseDelegatorFactory:
    """Response 服务的 delegator。

    容器在解析 Response 服务时调用本对象，callback 为原始工厂。
    """

    def __init__(self, detector: Callable[[], bool] = is_console):
        self._detector = detector

    def __call__(
        self,
        container: Any,
        name: str,
        callback: Callable[[], Any],
        options: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        return select_response(self._detector(), callback)

    def create_delegator_with_name(
        self,
        container: Any,
        name: str,
        requested_name: str,
        callback: Callable[[], Any],
    ) -> Any:
        """旧版按位置传参的注册协议，直接转发给 __call__。"""

        return self(container, requested_name, callback)
