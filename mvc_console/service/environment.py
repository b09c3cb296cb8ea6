"""控制台环境检测。"""

import os
from typing import Mapping, Optional

from mvc_console.config.settings import settings


# 出现任一变量即认为运行在 HTTP 网关（CGI/WSGI 服务器）之下
GATEWAY_ENV_VARS = ("GATEWAY_INTERFACE", "SERVER_SOFTWARE", "REQUEST_METHOD")

_override: Optional[bool] = None


def override_console(flag: Optional[bool]) -> None:
    """在进程范围内固定 is_console() 的结果；传 None 取消固定。"""

    global _override
    _override = None if flag is None else bool(flag)


def reset_console() -> None:
    override_console(None)


def is_console(environ: Optional[Mapping[str, str]] = None) -> bool:
    """当前进程是否运行在控制台（非 HTTP）环境中。

    优先级：override_console() > settings.force_console > 环境变量检测。
    """

    if _override is not None:
        return _override
    forced = getattr(settings, "force_console", None)
    if forced is not None:
        return bool(forced)
    env = os.environ if environ is None else environ
    return not any(env.get(name) for name in GATEWAY_ENV_VARS)
