"""并发执行器模块。

提供通用的有界线程池扇出，消除重复的并发处理逻辑。
"""

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class ConcurrentExecutor:
    """通用并发执行器

    只使用线程池：任务配置按引用共享，事件可以直接在工作线程中发出。
    Pillow 在解码和编码时会释放 GIL。
    """

    def __init__(self, max_workers: int | None = None):
        """初始化并发执行器

        Args:
            max_workers: 最大并发数，None 使用 ThreadPoolExecutor 默认值
        """
        self.max_workers = max_workers

    def execute_tasks(
        self,
        items: Sequence[T],
        task_function: Callable[[T], R],
        on_error: Callable[[T, Exception], R],
    ) -> list[R]:
        """执行并发任务，按完成顺序收集结果

        Args:
            items: 任务输入列表
            task_function: 要执行的任务函数
            on_error: 任务函数抛出异常时生成替代结果

        Returns:
            list: 每个输入恰好一个结果
        """
        if not items:
            return []

        results: list[R] = []
        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="press-worker"
        ) as executor:
            # 提交任务阶段
            future_to_item = {executor.submit(task_function, item): item for item in items}

            # 收集结果阶段
            for future in as_completed(future_to_item):
                item = future_to_item[future]
                try:
                    results.append(future.result())
                except Exception as e:
                    logger.error(f"并发任务处理失败: {item} - {e}")
                    results.append(on_error(item, e))

        return results

    def map_ordered(
        self, items: Sequence[T], task_function: Callable[[T], R]
    ) -> list[R]:
        """并发执行并按输入顺序返回结果，任务异常会向上传播"""
        if not items:
            return []

        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="press-worker"
        ) as executor:
            return list(executor.map(task_function, items))
