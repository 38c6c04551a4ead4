"""
Duration parsing utilities for the quote service.
Accepts Go-style duration strings ("90s", "5m", "1h30m", "250ms") or plain seconds.
"""

import math
import re
from datetime import timedelta
from typing import Union

from .exceptions import ConfigurationError, ErrorCodes


# 单位 -> 秒
_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_COMPONENT_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(value: Union[str, int, float, timedelta, None]) -> float:
    """将时长解析为秒数（float），0 表示禁用

    Args:
        value: "1h30m" 形式的字符串、秒数或 timedelta

    Returns:
        float: 秒数

    Raises:
        ConfigurationError: 格式无效或为负数
    """
    if value is None:
        return 0.0

    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = float(value)
    elif isinstance(value, str):
        seconds = _parse_duration_string(value.strip())
    else:
        raise ConfigurationError(
            f"Unsupported duration type: {type(value).__name__}",
            ErrorCodes.CONFIG_INVALID_VALUE
        )

    if not math.isfinite(seconds):
        raise ConfigurationError(
            f"Duration must be finite: {value!r}",
            ErrorCodes.CONFIG_INVALID_VALUE
        )
    if seconds < 0:
        raise ConfigurationError(
            f"Duration must not be negative: {value!r}",
            ErrorCodes.CONFIG_INVALID_VALUE
        )
    return seconds


def _parse_duration_string(text: str) -> float:
    if not text:
        raise ConfigurationError("Empty duration", ErrorCodes.CONFIG_INVALID_VALUE)

    # 纯数字按秒处理
    try:
        return float(text)
    except ValueError:
        pass

    sign = 1.0
    if text[0] in "+-":
        if text[0] == "-":
            sign = -1.0
        text = text[1:]

    pos = 0
    total = 0.0
    for match in _COMPONENT_RE.finditer(text):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()

    if pos == 0 or pos != len(text):
        raise ConfigurationError(
            f"Invalid duration: {text!r}",
            ErrorCodes.CONFIG_INVALID_VALUE
        )
    return sign * total


def format_duration(seconds: float) -> str:
    """将秒数格式化为 "1h2m3s" 形式，便于日志输出"""
    if seconds <= 0:
        return "0s"
    whole = int(seconds)
    hours, rest = divmod(whole, 3600)
    minutes, secs = divmod(rest, 60)
    frac = seconds - whole

    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs or frac or not parts:
        parts.append(f"{secs + frac:g}s")
    return "".join(parts)
