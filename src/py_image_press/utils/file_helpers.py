"""文件工具模块。

提供防覆盖的输出写入和文件大小读取。
"""

import os
from pathlib import Path

from .logging_helpers import get_logger
from .message_formatter import MessageFormatter
from .naming_helpers import PathResolver


logger = get_logger()


def write_unique(desired_path: str | Path, data: bytes) -> Path:
    """将数据写入一个不会覆盖已有文件的路径。

    按 ``-n`` 后缀顺序以独占方式创建文件；某个候选在检查之后被其他线程抢先创建时，
    继续尝试下一个候选。
    写入失败时删除本次调用创建的残缺文件。

    Args:
        desired_path: 期望的输出路径
        data: 要写入的字节

    Returns:
        Path: 实际写入的路径

    Raises:
        OSError: 创建或写入失败
    """
    desired_path = Path(desired_path)
    desired_path.parent.mkdir(parents=True, exist_ok=True)

    for candidate in PathResolver.candidate_paths(desired_path):
        if PathResolver.is_taken(candidate):
            continue
        try:
            handle = open(candidate, "xb")
        except FileExistsError:
            logger.debug(f"路径已被占用，尝试下一个: {candidate}")
            continue

        try:
            with handle:
                handle.write(data)
        except OSError:
            _remove_partial(candidate)
            raise
        return candidate


def _remove_partial(path: Path) -> None:
    try:
        os.remove(path)
    except OSError as e:
        logger.warning(MessageFormatter.operation_failed("清理残缺文件", path, e))


def get_file_size(file_path: str | Path) -> int | None:
    """获取文件大小，无法读取时返回 None"""
    try:
        return Path(file_path).stat().st_size
    except OSError as e:
        logger.debug(MessageFormatter.operation_failed("读取文件大小", file_path, e))
        return None
