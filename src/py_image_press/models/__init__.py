"""数据模型包。

定义任务配置、处理结果和图片元数据。
"""

from .constants import (
    ImageFormats,
    OutputFormat,
    QualityDefaults,
    ValidationLimits,
    get_extension,
    get_format_alias,
)
from .image_metadata import ImageMetadata
from .job_config import JobConfig
from .results import BatchSummary, PreviewResult, ProcessResult, ProcessStatus


__all__ = [
    "BatchSummary",
    "ImageFormats",
    "ImageMetadata",
    "JobConfig",
    "OutputFormat",
    "PreviewResult",
    "ProcessResult",
    "ProcessStatus",
    "QualityDefaults",
    "ValidationLimits",
    "get_extension",
    "get_format_alias",
]
