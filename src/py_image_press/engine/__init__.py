"""图像压缩处理引擎模块。

包含批量处理、并发执行、事件通道和后台调度。
"""

from .batch import BatchExecutor
from .concurrent_executor import ConcurrentExecutor
from .dispatcher import JobDispatcher
from .events import EventEmitter, EventRecorder, EventType


__all__ = [
    "BatchExecutor",
    "ConcurrentExecutor",
    "EventEmitter",
    "EventRecorder",
    "EventType",
    "JobDispatcher",
]
