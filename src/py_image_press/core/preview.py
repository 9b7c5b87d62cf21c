"""压缩大小预估模块。

对缩小后的代理图进行编码，再按面积比例放大字节数，近似得到全尺寸输出大小。
结果只是估计值：面积线性缩放是经验规则，不是上界。
"""

from PIL import Image

from ..config import get_config
from ..engine.concurrent_executor import ConcurrentExecutor
from ..engine.events import EventEmitter, EventType
from ..exceptions import CompressionError
from ..models.job_config import JobConfig
from ..models.results import PreviewResult
from ..utils.file_helpers import get_file_size
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter
from .codecs import encode
from .pipeline import open_image
from .resizer import FAST, compute_target_size, resampling_mode


logger = get_logger()


class PreviewEstimator:
    """代理图预估器

    只读操作，不写入任何文件。无法打开或代理编码失败的文件直接省略。
    """

    def __init__(self, max_workers: int | None = None, proxy_size: int | None = None):
        """初始化预估器

        Args:
            max_workers: 最大并发数，None 使用线程池默认值
            proxy_size: 代理图最大边长，None 使用配置值 (256)
        """
        self.proxy_size = proxy_size or get_config().processing.PROXY_SIZE
        self.concurrent_executor = ConcurrentExecutor(max_workers)

    def estimate(self, config: JobConfig) -> list[PreviewResult]:
        """按输入顺序返回所有可预估文件的结果"""
        results = self.concurrent_executor.map_ordered(
            config.paths, lambda path: self.estimate_one(path, config)
        )
        return [r for r in results if r is not None]

    def run(self, config: JobConfig, emitter: EventEmitter) -> list[PreviewResult]:
        """预估并发出一次 preview-done 事件"""
        results = self.estimate(config)
        logger.info(f"预估完成: {len(results)}/{len(config.paths)} 个文件")
        emitter.emit(EventType.PREVIEW_DONE, results)
        return results

    def estimate_one(self, path: str, config: JobConfig) -> PreviewResult | None:
        """预估单个文件，失败时返回 None"""
        original_size = get_file_size(path)
        if original_size is None:
            return None

        try:
            proxy, ratio = self._build_proxy(path, config)
        except Exception as e:
            logger.debug(MessageFormatter.operation_failed("预估打开", path, e))
            return None

        # 按扩展名保存的格式同样经过编码器，给出预估
        try:
            encoded_size = len(encode(proxy, config.format, config.quality))
        except CompressionError as e:
            logger.debug(MessageFormatter.operation_failed("预估编码", path, e))
            return None

        return PreviewResult(
            path=path,
            original_size=original_size,
            preview_size=int(encoded_size * ratio),
        )

    def _build_proxy(self, path: str, config: JobConfig) -> tuple[Image.Image, float]:
        """解码并生成代理图，返回 (代理图, 最终面积/代理面积)"""
        with open_image(path) as img:
            final_w, final_h = compute_target_size(
                img.width, img.height, config.max_width, config.max_height
            )

            if final_w > self.proxy_size:
                proxy_w, proxy_h = compute_target_size(
                    img.width, img.height, self.proxy_size, self.proxy_size
                )
                ratio = (final_w * final_h) / (proxy_w * proxy_h)
            else:
                proxy_w, proxy_h = final_w, final_h
                ratio = 1.0

            if (proxy_w, proxy_h) == img.size:
                return img.copy(), ratio
            return resampling_mode(img).resize((proxy_w, proxy_h), FAST), ratio
