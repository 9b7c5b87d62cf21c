"""图片元数据读取模块。

并发读取尺寸和磁盘大小，只解析文件头（Pillow 的 Image.open 是惰性的）。
"""

from collections.abc import Iterable

from PIL import Image

from ..engine.concurrent_executor import ConcurrentExecutor
from ..models.image_metadata import ImageMetadata
from ..utils.file_helpers import get_file_size
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter


logger = get_logger()


class MetadataReader:
    """图片元数据读取器"""

    def __init__(self, max_workers: int | None = None):
        self.concurrent_executor = ConcurrentExecutor(max_workers)

    def read(self, paths: Iterable[str]) -> list[ImageMetadata]:
        """按输入顺序返回可读取文件的元数据，不可读的文件直接省略"""
        results = self.concurrent_executor.map_ordered(list(paths), self.read_one)
        return [r for r in results if r is not None]

    @staticmethod
    def read_one(path: str) -> ImageMetadata | None:
        """读取单个文件的元数据，失败时返回 None"""
        size = get_file_size(path)
        if size is None:
            return None

        try:
            with Image.open(path) as img:
                width, height = img.size
        except Exception as e:
            logger.debug(MessageFormatter.operation_failed("读取图片尺寸", path, e))
            return None

        return ImageMetadata(path=path, width=width, height=height, size=size)
