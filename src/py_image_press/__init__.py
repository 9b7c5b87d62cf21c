"""批量图像压缩与缩放库。

基于 Pillow 的批量压缩、代理图大小预估和防覆盖输出。
"""

__version__ = "0.1.0"
__author__ = "crper"
__description__ = "批量图像压缩库，支持 JPEG/PNG/WEBP/AVIF 与大小预估"

# 核心功能导出
from .compressor import BatchCompressor, build_job_config
from .engine.events import EventEmitter, EventRecorder, EventType
from .models import (
    ImageMetadata,
    JobConfig,
    PreviewResult,
    ProcessResult,
    ProcessStatus,
)


__all__ = [
    "BatchCompressor",
    "EventEmitter",
    "EventRecorder",
    "EventType",
    "ImageMetadata",
    "JobConfig",
    "PreviewResult",
    "ProcessResult",
    "ProcessStatus",
    "build_job_config",
    "get_version",
]


def get_version() -> str:
    """获取版本号。"""
    return __version__
