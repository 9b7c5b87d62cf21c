"""核心模块包。

格式编码、尺寸调整和单文件处理流水线。
"""

from .codecs import avif_supported, encode
from .pipeline import open_image, process_image
from .resizer import FAST, HIGH_QUALITY, compute_target_size, resize_to_fit


__all__ = [
    "FAST",
    "HIGH_QUALITY",
    "avif_supported",
    "compute_target_size",
    "encode",
    "open_image",
    "process_image",
    "resize_to_fit",
]
