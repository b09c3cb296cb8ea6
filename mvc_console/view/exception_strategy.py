"""控制台异常渲染策略。

监听 dispatch.error 与 render.error，把事件中的异常格式化为纯文本，
包装成 ConsoleModel 写回事件结果。以下情况不做处理：

- 事件没有错误码；
- 事件结果已经是响应对象；
- 错误码属于 route-not-found 策略负责的三种。

处理过程中不会向 EventManager 抛出异常。
"""

from typing import Any, Dict, Optional, Union

from mvc_console.config.settings import settings
from mvc_console.domain.exceptions import TemplateError
from mvc_console.domain.responses import ResponseInterface
from mvc_console.events import (
    EVENT_DISPATCH_ERROR,
    EVENT_RENDER_ERROR,
    ErrorCode,
    EventManager,
    ListenerAggregate,
    MvcEvent,
)
from mvc_console.infrastructure.logging.logger import logger
from .templates import (
    DEFAULT_MESSAGE,
    DEFAULT_PREVIOUS_MESSAGE,
    ExceptionRecord,
    Formatter,
    FunctionTemplate,
    LiteralTemplate,
    MessageTemplate,
    as_template,
    blank_values,
    substitute,
)
from .view_model import ConsoleModel


def _configured(value: Optional[str], default: str) -> str:
    return default if value is None else value


class ExceptionStrategy(ListenerAggregate):
    """把异常渲染为控制台消息的监听器聚合。"""

    def __init__(
        self,
        display_exceptions: Optional[bool] = None,
        message: Union[str, Formatter, None] = None,
        previous_message: Optional[str] = None,
        error_level: Optional[int] = None,
    ):
        super().__init__()
        if display_exceptions is None:
            display_exceptions = settings.display_exceptions
        self._display_exceptions = bool(display_exceptions)
        self._message: MessageTemplate = as_template(
            message if message is not None else _configured(settings.exception_message, DEFAULT_MESSAGE)
        )
        self._previous_message = ""
        self.set_previous_message(
            previous_message
            if previous_message is not None
            else _configured(settings.previous_exception_message, DEFAULT_PREVIOUS_MESSAGE)
        )
        self.error_level = int(error_level if error_level is not None else settings.error_level)

    def attach(self, events: EventManager, priority: int = 1) -> None:
        self.listeners.append(events.attach(EVENT_DISPATCH_ERROR, self.prepare_exception_view_model, priority))
        self.listeners.append(events.attach(EVENT_RENDER_ERROR, self.prepare_exception_view_model, priority))
        logger.debug("exception_strategy.attach", extra={"extra": {"priority": priority}})

    def detach(self, events: EventManager) -> None:
        count = len(self.listeners)
        super().detach(events)
        logger.debug("exception_strategy.detach", extra={"extra": {"listeners": count}})

    # ---- 配置 ----

    def set_display_exceptions(self, display_exceptions: bool) -> "ExceptionStrategy":
        self._display_exceptions = bool(display_exceptions)
        return self

    def displays_exceptions(self) -> bool:
        return self._display_exceptions

    def get_message(self) -> Union[str, Formatter]:
        """返回当前消息模板（字符串或可调用对象）。"""

        if isinstance(self._message, FunctionTemplate):
            return self._message.func
        return self._message.text

    def set_message(self, message: Union[str, Formatter]) -> "ExceptionStrategy":
        """设置控制台消息模板。

        message 可以是带占位符的字符串，也可以是
        ``func(exception, display_exceptions) -> str``；
        使用函数时 previous 模板不参与渲染。
        """

        self._message = as_template(message)
        return self

    def get_previous_message(self) -> str:
        return self._previous_message

    def set_previous_message(self, previous_message: str) -> "ExceptionStrategy":
        if not isinstance(previous_message, str):
            raise TemplateError(
                code="TEMPLATE_INVALID",
                message=f"Previous message template must be a string, got {type(previous_message).__name__}",
                template_type=type(previous_message).__name__,
            )
        self._previous_message = previous_message
        return self

    # ---- 事件处理 ----

    def prepare_exception_view_model(self, e: MvcEvent) -> None:
        """根据事件中的异常生成 ConsoleModel 并写入事件结果。"""

        error = e.get_error()
        if not error:
            return

        if isinstance(e.get_result(), ResponseInterface):
            self._log_skip(error, "result_is_response")
            return

        if error in ErrorCode.NOT_FOUND:
            # 交给 route-not-found 策略处理
            self._log_skip(error, "route_not_found")
            return

        exception = e.get_param("exception")
        message = self._render(exception)

        model = ConsoleModel()
        model.set_result(message)
        model.set_error_level(self.error_level)
        e.set_result(model)

        logger.info(
            "exception_strategy.rendered",
            extra={"extra": {
                "error": error,
                "event": e.name,
                "exception": type(exception).__name__ if exception is not None else None,
            }},
        )

    def _render(self, exception: Any) -> str:
        template = self._message
        if isinstance(template, FunctionTemplate):
            try:
                return template.render(exception, self._display_exceptions)
            except Exception as exc:
                logger.error(
                    "exception_strategy.formatter_failed",
                    extra={"extra": {"formatter_error": f"{type(exc).__name__}: {exc}"}},
                )
                return substitute(DEFAULT_MESSAGE, blank_values())

        if self._display_exceptions and isinstance(exception, BaseException):
            return self._render_exception(template, exception)
        return template.render(blank_values())

    def _render_exception(self, template: LiteralTemplate, exception: BaseException) -> str:
        record = ExceptionRecord.from_exception(exception)
        # previous 段落沿用当前异常的调用栈
        previous = "".join(
            substitute(self._previous_message, ancestor.placeholders(stack=record.stack))
            for ancestor in record.chain()
        )
        values: Dict[str, str] = record.placeholders()
        values[":previous"] = previous
        return template.render(values)

    @staticmethod
    def _log_skip(error: str, reason: str) -> None:
        logger.debug("exception_strategy.skip", extra={"extra": {"error": error, "reason": reason}})
