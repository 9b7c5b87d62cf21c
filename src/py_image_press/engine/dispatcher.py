"""后台任务调度模块。

把预估和批处理任务放到后台线程执行，调用方立即返回，结果只通过事件送达。
"""

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from ..config import get_config
from ..utils.logging_helpers import get_logger


logger = get_logger()


class JobDispatcher:
    """即发即忘的任务调度器

    返回的 Future 调用方可以忽略；没有取消和超时，任务一旦开始就会运行到结束。
    """

    def __init__(self, job_slots: int | None = None):
        self.job_slots = job_slots or get_config().processing.JOB_SLOTS
        self._executor = ThreadPoolExecutor(
            max_workers=self.job_slots, thread_name_prefix="press-job"
        )

    def submit(self, name: str, job: Callable[..., Any], *args: Any) -> Future:
        """提交后台任务

        Args:
            name: 任务名称，用于日志
            job: 任务函数
            *args: 任务参数

        Returns:
            Future: 任务句柄
        """
        logger.debug(f"提交后台任务: {name}")
        future = self._executor.submit(job, *args)
        future.add_done_callback(lambda f: self._log_outcome(name, f))
        return future

    @staticmethod
    def _log_outcome(name: str, future: Future) -> None:
        if future.cancelled():
            return
        if (error := future.exception()) is not None:
            logger.error(f"后台任务 {name} 异常终止: {error!r}")

    def shutdown(self, wait: bool = True) -> None:
        """关闭调度器，wait=True 时等待已提交任务完成"""
        self._executor.shutdown(wait=wait)
