"""批量处理器模块。

将任务扇出到固定大小的线程池，逐项发出生命周期事件，全部完成后发出一次结束事件。
"""

from ..config import get_config
from ..core.pipeline import process_image
from ..exceptions import ErrorHandler
from ..models.job_config import JobConfig
from ..models.results import BatchSummary, ProcessResult
from ..utils.logging_helpers import get_logger
from .concurrent_executor import ConcurrentExecutor
from .events import EventEmitter, EventType


logger = get_logger()


class BatchExecutor:
    """批量图像处理器

    每个输入路径恰好产生一次 img-start 和一次 img-processed；
    不同文件之间的顺序不作保证。
    """

    def __init__(self, max_workers: int | None = None):
        """初始化批量处理器

        Args:
            max_workers: 工作线程数，None 使用配置值 (4)；限制同时解码的图片数量
        """
        self.max_workers = max_workers or get_config().compression.MAX_WORKERS
        self.concurrent_executor = ConcurrentExecutor(self.max_workers)

    def run(self, config: JobConfig, emitter: EventEmitter) -> list[ProcessResult]:
        """执行批处理（阻塞），结果同时通过事件发出

        Args:
            config: 任务配置，所有工作线程共享同一对象
            emitter: 事件通道

        Returns:
            list[ProcessResult]: 按完成顺序的结果
        """
        logger.info(
            f"开始批处理: {len(config.paths)} 个文件 → {config.output_dir} "
            f"({config.format}, 质量 {config.quality}, 线程 {self.max_workers})"
        )

        try:
            results = self.concurrent_executor.execute_tasks(
                items=config.paths,
                task_function=lambda path: self._process_item(path, config, emitter),
                on_error=lambda path, e: self._report_unexpected(path, e, emitter),
            )
        finally:
            emitter.emit(EventType.BATCH_FINISHED)

        logger.info(f"批处理结束: {BatchSummary(results=results).get_summary()}")
        return results

    def _process_item(
        self, path: str, config: JobConfig, emitter: EventEmitter
    ) -> ProcessResult:
        emitter.emit(EventType.IMG_START, path)
        result = process_image(path, config)
        if not result.success:
            logger.warning(f"处理失败: {path} - {result.error_msg}")
        emitter.emit(EventType.IMG_PROCESSED, result)
        return result

    @staticmethod
    def _report_unexpected(
        path: str, error: Exception, emitter: EventEmitter
    ) -> ProcessResult:
        result = ErrorHandler.handle_with_context(error, path, "并发任务处理")
        emitter.emit(EventType.IMG_PROCESSED, result)
        return result
