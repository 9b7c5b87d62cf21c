"""文件命名工具模块。

提供统一的输出文件命名和防覆盖路径解析。
"""

import itertools
from collections.abc import Iterator
from pathlib import Path

from ..config import get_config
from ..models.constants import get_extension


class FileNamingStrategy:
    """文件命名策略类"""

    @staticmethod
    def generate_output_name(input_path: str | Path, format_tag: str) -> str:
        """生成输出文件名 ``{stem}-compressed.{ext}``

        Args:
            input_path: 输入文件路径
            format_tag: 目标格式标签，jpeg 会规范化为 jpg

        Returns:
            str: 生成的文件名（不含路径）
        """
        stem = Path(input_path).stem
        suffix = get_config().processing.OUTPUT_SUFFIX
        return f"{stem}{suffix}.{get_extension(format_tag)}"


class PathResolver:
    """路径解析器"""

    @staticmethod
    def resolve_output_path(
        input_path: str | Path, output_dir: str | Path, format_tag: str
    ) -> Path:
        """计算理论输出路径（不检查是否已存在）"""
        filename = FileNamingStrategy.generate_output_name(input_path, format_tag)
        return Path(output_dir) / filename

    @staticmethod
    def is_taken(path: Path) -> bool:
        """路径上是否已有条目，悬空的符号链接也算占用"""
        return path.is_symlink() or path.exists()

    @staticmethod
    def candidate_paths(path: Path) -> Iterator[Path]:
        """依次产出 ``path``、``{stem}-1{suffix}``、``{stem}-2{suffix}``…"""
        yield path
        for counter in itertools.count(1):
            yield path.parent / f"{path.stem}-{counter}{path.suffix}"

    @staticmethod
    def ensure_unique_path(path: Path) -> Path:
        """确保路径唯一，如果文件已存在则添加 ``-n`` 数字后缀

        Args:
            path: 原始路径

        Returns:
            Path: 调用时刻未被占用的路径
        """
        return next(
            candidate
            for candidate in PathResolver.candidate_paths(path)
            if not PathResolver.is_taken(candidate)
        )


def ensure_unique_path(path: str | Path) -> Path:
    """便捷函数，见 PathResolver.ensure_unique_path"""
    return PathResolver.ensure_unique_path(Path(path))
