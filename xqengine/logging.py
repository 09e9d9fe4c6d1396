"""
中央日志配置

引擎代码直接使用 loguru 的 logger，只有入口（CLI）调用 configure_logging 配置输出。
"""

import sys
from pathlib import Path

from loguru import logger


def configure_logging(level: str = "WARNING", log_file: Path | None = None) -> None:
    """重置 logger：stderr 按 level 输出，可选再写一份滚动日志文件

    未知的 level 抛出 ValueError，此时原有输出保持不变
    """
    level = logger.level(level.upper()).name
    logger.remove()
    logger.add(sys.stderr, level=level)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            rotation="10 MB",
            retention="7 days",
            level="DEBUG",
        )


__all__ = ["logger", "configure_logging"]
