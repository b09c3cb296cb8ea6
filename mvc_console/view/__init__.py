"""控制台视图层：异常渲染策略、视图模型与消息模板。"""

from .exception_strategy import ExceptionStrategy
from .templates import (
    DEFAULT_MESSAGE,
    DEFAULT_PREVIOUS_MESSAGE,
    ExceptionRecord,
    FunctionTemplate,
    LiteralTemplate,
    as_template,
    substitute,
)
from .view_model import ConsoleModel

__all__ = [
    "ConsoleModel",
    "DEFAULT_MESSAGE",
    "DEFAULT_PREVIOUS_MESSAGE",
    "ExceptionRecord",
    "ExceptionStrategy",
    "FunctionTemplate",
    "LiteralTemplate",
    "as_template",
    "substitute",
]
