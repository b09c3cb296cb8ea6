"""领域层模型。

包含：
- responses: ResponseInterface 协议与 ConsoleResponse / HttpResponse。
- exceptions: 配置阶段使用的异常类型。
"""
