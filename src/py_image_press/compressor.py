"""批量图像压缩器接口。

组合事件通道、后台调度、批处理器、预估器和元数据读取器的简洁用户接口。
"""

from collections.abc import Iterable, Sequence
from concurrent.futures import Future
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from .core.image_info import MetadataReader
from .core.preview import PreviewEstimator
from .engine import BatchExecutor, EventEmitter, JobDispatcher
from .exceptions import ValidationError
from .models import ImageMetadata, JobConfig, PreviewResult, ProcessResult
from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter


logger = get_logger()


def build_job_config(
    paths: Sequence[str | Path],
    output_dir: str | Path,
    format: str,
    quality: int,
    max_width: int | None = None,
    max_height: int | None = None,
) -> JobConfig:
    """验证原始参数并构建任务配置

    Raises:
        ValidationError: 参数不合法
    """
    try:
        return JobConfig(
            paths=tuple(str(p) for p in paths),
            output_dir=Path(output_dir),
            format=format,
            quality=quality,
            max_width=max_width,
            max_height=max_height,
        )
    except PydanticValidationError as e:
        details = "; ".join(
            MessageFormatter.validation_error(
                ".".join(str(loc) for loc in err["loc"]), err.get("input"), err["msg"]
            )
            for err in e.errors()
        )
        raise ValidationError(details) from e


class BatchCompressor:
    """批量图像压缩器。

    preview_images / compress_images 立即返回，结果通过 emitter 的事件送达；
    run_preview / run_batch 是对应的阻塞版本。

    Examples:
        >>> compressor = BatchCompressor()
        >>> compressor.emitter.on(EventType.IMG_PROCESSED, print)
        >>> compressor.compress_images(build_job_config(["a.jpg"], "out", "webp", 80))
    """

    def __init__(
        self,
        max_workers: int | None = None,
        emitter: EventEmitter | None = None,
    ):
        """初始化压缩器。

        Args:
            max_workers: 批处理工作线程数，None 使用配置值 (4)
            emitter: 事件通道，None 时新建
        """
        if max_workers is not None and max_workers <= 0:
            raise ValidationError("max_workers 必须大于 0")

        self.emitter = emitter or EventEmitter()
        self.batch_executor = BatchExecutor(max_workers)
        self.preview_estimator = PreviewEstimator()
        self.metadata_reader = MetadataReader()
        self.dispatcher = JobDispatcher()

        logger.debug("初始化批量压缩器")

    def preview_images(self, config: JobConfig) -> Future:
        """后台预估，完成后发出一次 preview-done"""
        return self.dispatcher.submit(
            "preview", self.preview_estimator.run, config, self.emitter
        )

    def compress_images(self, config: JobConfig) -> Future:
        """后台批处理，逐项发出 img-start / img-processed，最后发出 batch-finished"""
        return self.dispatcher.submit(
            "compress", self.batch_executor.run, config, self.emitter
        )

    def run_preview(self, config: JobConfig) -> list[PreviewResult]:
        """在当前线程预估"""
        return self.preview_estimator.run(config, self.emitter)

    def run_batch(self, config: JobConfig) -> list[ProcessResult]:
        """在当前线程批处理"""
        return self.batch_executor.run(config, self.emitter)

    def get_images_metadata(self, paths: Iterable[str | Path]) -> list[ImageMetadata]:
        """读取图片尺寸和文件大小，不可读的文件省略"""
        return self.metadata_reader.read(str(p) for p in paths)

    def shutdown(self, wait: bool = True) -> None:
        self.dispatcher.shutdown(wait=wait)

    def __enter__(self) -> "BatchCompressor":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown(wait=True)
