"""单文件处理流水线。

解码、缩放、命名、防覆盖解析、编码、写入；任何情况下都只返回一个 ProcessResult。
"""

from PIL import Image

from ..exceptions import ErrorHandler
from ..models.job_config import JobConfig
from ..models.results import ProcessResult
from ..utils.file_helpers import write_unique
from ..utils.logging_helpers import get_logger
from ..utils.naming_helpers import PathResolver
from .codecs import encode
from .resizer import HIGH_QUALITY, resize_to_fit


logger = get_logger()


def open_image(path: str) -> Image.Image:
    """完整解码图片文件

    Raises:
        OSError: 文件不存在、无法识别或解码失败
        Image.DecompressionBombError: 像素数超过安全上限
    """
    img = Image.open(path)
    try:
        img.load()
    except Exception:
        img.close()
        raise
    return img


def process_image(path: str, config: JobConfig) -> ProcessResult:
    """处理单个图片。

    Args:
        path: 输入文件路径
        config: 任务配置（只读）

    Returns:
        ProcessResult: 成功结果带输出路径，失败结果带错误信息
    """
    try:
        img = open_image(path)
    except Exception as e:
        return ErrorHandler.handle_open_error(e, path)

    try:
        with img:
            final_img = resize_to_fit(img, config.max_width, config.max_height, HIGH_QUALITY)
            if final_img is not img:
                logger.debug(f"缩放 {path}: {img.size} → {final_img.size}")

            desired_path = PathResolver.resolve_output_path(
                path, config.output_dir, config.format
            )
            data = encode(final_img, config.format, config.quality)
            output_path = write_unique(desired_path, data)
    except Exception as e:
        return ErrorHandler.handle_compression_error(e, path)

    logger.debug(f"处理成功: {path} → {output_path}")
    return ProcessResult.succeeded(path, output_path)
