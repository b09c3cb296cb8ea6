class ConsoleModel:
    """控制台视图模型：渲染结果文本 + 错误级别。"""

    def __init__(self, result: str = ""):
        self._result = result
        self._error_level = 0

    def set_result(self, text: str) -> "ConsoleModel":
        self._result = text
        return self

    def get_result(self) -> str:
        return self._result

    def set_error_level(self, error_level: int) -> "ConsoleModel":
        self._error_level = int(error_level)
        return self

    def get_error_level(self) -> int:
        return self._error_level

    def __repr__(self) -> str:
        return f"ConsoleModel(error_level={self._error_level}, result={self._result[:40]!r})"
