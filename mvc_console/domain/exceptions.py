"""统一异常模型。

这里的异常只会在配置阶段抛出（设置模板、解绑监听器等）；
ExceptionStrategy 在处理事件时从不向外抛出异常。
"""


class MvcConsoleError(Exception):
    """异常基类。

    Attributes:
        code: 机器可读错误码（如 "TEMPLATE_INVALID"）。
        message: 用户可读错误信息。
        extra: 其他补充字段（例如 event、template_type 等）。
    """

    def __init__(self, code: str, message: str, **extra):
        self.code = code
        self.message = message
        self.extra = extra
        super().__init__(message)


class TemplateError(MvcConsoleError):
    """消息模板既不是字符串也不是可调用对象。"""


class ListenerError(MvcConsoleError):
    """解绑了不属于当前 EventManager 的监听句柄。"""
