"""异常记录与消息模板。

- ExceptionRecord: 从 Python 异常提取出的只读记录（含 previous 链）。
- substitute(): 按固定顺序逐个完成 ``:placeholder`` 替换。
- LiteralTemplate / FunctionTemplate: 消息模板的两种形态，
  在配置阶段由 as_template() 统一转换，渲染时按类型分派。

模板可用占位符：

    :className   异常的完整类名（内置异常省略 ``builtins.``）
    :message     异常消息
    :code        异常码（``code``/``errno`` 属性，缺省为 0）
    :file        抛出异常的文件
    :line        抛出异常的行号
    :stack       完整调用栈
    :previous    previous 异常段落（仅顶层模板）
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Union

from mvc_console.domain.exceptions import TemplateError


RULER = "=" * 70
DIVIDER = "-" * 70

DEFAULT_MESSAGE = (
    f"{RULER}\n"
    "   The application has thrown an exception!\n"
    f"{RULER}\n"
    " :className\n"
    " :message\n"
    f"{DIVIDER}\n"
    ":file::line\n"
    ":stack\n"
    f"{RULER}\n"
    "   Previous Exception(s):\n"
    ":previous\n"
)

DEFAULT_PREVIOUS_MESSAGE = (
    f"{RULER}\n"
    " :className\n"
    " :message\n"
    f"{DIVIDER}\n"
    ":file::line\n"
    ":stack\n"
)

# 替换顺序固定
PLACEHOLDERS = (":className", ":message", ":code", ":file", ":line", ":stack", ":previous")


def substitute(template: str, values: Mapping[str, str]) -> str:
    """按 PLACEHOLDERS 的顺序逐个替换 values 中给出的占位符。

    每一步都作用在上一步的结果上：先替换进去的文本里如果含有
    排在后面的占位符（例如异常消息里的 ``:line``），也会被替换。
    """

    text = template
    for name in PLACEHOLDERS:
        if name in values:
            text = text.replace(name, values[name])
    return text


def blank_values() -> Dict[str, str]:
    return {name: "" for name in PLACEHOLDERS}


def _class_name(exc: BaseException) -> str:
    cls = type(exc)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def _message(exc: BaseException) -> str:
    try:
        return str(exc)
    except Exception:
        return f"<unprintable {type(exc).__name__} object>"


def _code(exc: BaseException) -> int:
    for attr in ("code", "errno"):
        try:
            value = getattr(exc, attr, None)
        except Exception:
            continue
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return 0


def _location(exc: BaseException) -> tuple[str, int]:
    tb = exc.__traceback__
    if tb is None:
        return "", 0
    while tb.tb_next is not None:
        tb = tb.tb_next
    return tb.tb_frame.f_code.co_filename, tb.tb_lineno


def _stack(exc: BaseException) -> str:
    if exc.__traceback__ is None:
        return ""
    return "".join(traceback.format_tb(exc.__traceback__)).rstrip("\n")


def _previous_of(exc: BaseException) -> Optional[BaseException]:
    if exc.__cause__ is not None:
        return exc.__cause__
    if exc.__suppress_context__:
        return None
    return exc.__context__


@dataclass(frozen=True)
class ExceptionRecord:
    """异常链中的一个节点。"""

    class_name: str
    message: str
    code: int
    file: str
    line: int
    stack: str
    previous: Optional["ExceptionRecord"] = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ExceptionRecord":
        """从异常构造记录，previous 取 ``__cause__``/``__context__``。

        遇到已经出现过的异常即停止，保证链条有限且无环。
        """

        chain: List[BaseException] = []
        seen: set[int] = set()
        current: Optional[BaseException] = exc
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            chain.append(current)
            current = _previous_of(current)

        record = cls._from_single(chain[-1], None)
        for item in reversed(chain[:-1]):
            record = cls._from_single(item, record)
        return record

    @classmethod
    def _from_single(cls, exc: BaseException, previous: Optional["ExceptionRecord"]) -> "ExceptionRecord":
        file, line = _location(exc)
        return cls(
            class_name=_class_name(exc),
            message=_message(exc),
            code=_code(exc),
            file=file,
            line=line,
            stack=_stack(exc),
            previous=previous,
        )

    def chain(self) -> Iterator["ExceptionRecord"]:
        """按由近到远的顺序遍历祖先（不含自身）。"""

        node = self.previous
        while node is not None:
            yield node
            node = node.previous

    def placeholders(self, stack: Optional[str] = None) -> Dict[str, str]:
        """占位符映射；stack 不为空时用它替换本记录的调用栈。"""

        return {
            ":className": self.class_name,
            ":message": self.message,
            ":code": str(self.code),
            ":file": self.file,
            ":line": str(self.line),
            ":stack": self.stack if stack is None else stack,
        }


Formatter = Callable[[Any, bool], Any]


@dataclass(frozen=True)
class LiteralTemplate:
    """带占位符的字符串模板。"""

    text: str

    def render(self, values: Mapping[str, str]) -> str:
        return substitute(self.text, values)


@dataclass(frozen=True)
class FunctionTemplate:
    """由调用方负责格式化的模板：``func(exception, display_exceptions) -> str``。"""

    func: Formatter

    def render(self, exception: Any, display_exceptions: bool) -> str:
        return str(self.func(exception, display_exceptions))


MessageTemplate = Union[LiteralTemplate, FunctionTemplate]


def as_template(value: Union[str, Formatter, MessageTemplate]) -> MessageTemplate:
    """把字符串或可调用对象转换为模板变体。"""

    if isinstance(value, (LiteralTemplate, FunctionTemplate)):
        return value
    if isinstance(value, str):
        return LiteralTemplate(value)
    if callable(value):
        return FunctionTemplate(value)
    raise TemplateError(
        code="TEMPLATE_INVALID",
        message=f"Message template must be a string or callable, got {type(value).__name__}",
        template_type=type(value).__name__,
    )
