"""图像处理相关常量定义。

输出格式枚举与扩展名映射，基于 Pillow 的扩展名注册表。
"""

from enum import Enum
from typing import Final

from PIL import Image


class OutputFormat(str, Enum):
    """输出格式枚举，OTHER 走 Pillow 的通用按扩展名保存路径"""

    JPEG = "jpeg"
    PNG = "png"
    WEBP = "webp"
    AVIF = "avif"
    OTHER = "other"

    @classmethod
    def from_tag(cls, tag: str) -> "OutputFormat":
        """将格式标签映射为枚举值，未知标签归入 OTHER"""
        normalized = get_format_alias(tag)
        try:
            return cls(normalized)
        except ValueError:
            return cls.OTHER


class ImageFormats:
    """基于 Pillow 的动态图像格式管理"""

    # 只定义必要的别名映射（用户友好的别名）
    ALIASES: Final[dict[str, str]] = {
        "jpg": "jpeg",
    }

    # 扩展名规范化：jpeg 统一写成 jpg
    PREFERRED_EXTENSIONS: Final[dict[str, str]] = {
        "jpeg": "jpg",
    }

    # 通用路径未能识别扩展名时使用的 Pillow 格式
    FALLBACK_FORMAT: Final[str] = "JPEG"

    @classmethod
    def pillow_format_for(cls, tag: str) -> str:
        """通过扩展名注册表查找 Pillow 保存格式"""
        extension = f".{get_extension(tag)}"
        return Image.registered_extensions().get(extension, cls.FALLBACK_FORMAT)


class QualityDefaults:
    """质量相关默认值"""

    MIN_QUALITY: Final[int] = 0
    MAX_QUALITY: Final[int] = 100


class ValidationLimits:
    """验证相关限制"""

    # 图像尺寸上限
    MAX_DIMENSION: Final[int] = 50000


# 便捷访问函数
def get_format_alias(format_str: str) -> str:
    """获取格式的标准名称"""
    format_lower = format_str.strip().lower()
    return ImageFormats.ALIASES.get(format_lower, format_lower)


def get_extension(format_str: str) -> str:
    """获取格式标签对应的输出扩展名（不带点）"""
    format_lower = format_str.strip().lower()
    return ImageFormats.PREFERRED_EXTENSIONS.get(format_lower, format_lower)
