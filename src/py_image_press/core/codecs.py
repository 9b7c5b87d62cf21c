"""格式编码器模块。

将解码后的图片编码为目标格式的字节：JPEG、调色板量化 PNG、WEBP、AVIF，
其余格式通过 Pillow 的按扩展名保存路径处理。
"""

import io
import math
from functools import lru_cache

from PIL import Image, ImageChops, ImageStat

from ..config import get_config
from ..exceptions import handle_codec_errors
from ..models.constants import ImageFormats, OutputFormat
from ..utils.logging_helpers import get_logger


logger = get_logger()

# 量化后允许的最大 RMS 误差随质量上限线性收紧
_RMS_PER_QUALITY_POINT = 0.25


def encode(img: Image.Image, format_tag: str, quality: int) -> bytes:
    """按格式标签编码图片

    Args:
        img: 已解码的图片
        format_tag: 格式标签（jpg/jpeg/png/webp/avif 或其他扩展名）
        quality: 质量 0-100，含义随格式而定

    Returns:
        bytes: 编码后的文件内容

    Raises:
        EncodeError: 编码或量化失败
    """
    match OutputFormat.from_tag(format_tag):
        case OutputFormat.JPEG:
            return encode_jpeg(img, quality)
        case OutputFormat.PNG:
            return encode_png(img, quality)
        case OutputFormat.WEBP:
            return encode_webp(img, quality)
        case OutputFormat.AVIF:
            return encode_avif(img, quality)
        case _:
            return encode_generic(img, format_tag)


def normalize_mode(img: Image.Image) -> Image.Image:
    """把非常见色彩模式转换为 RGB 或 RGBA"""
    if img.mode in ("RGB", "RGBA", "L"):
        return img
    if img.has_transparency_data:
        return img.convert("RGBA")
    return img.convert("RGB")


def _save_to_bytes(img: Image.Image, pillow_format: str, **params) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format=pillow_format, **params)
    return buffer.getvalue()


def _flatten_alpha(img: Image.Image) -> Image.Image:
    """将透明图片合成到白色背景上"""
    if img.mode not in ("RGBA", "LA", "PA") and not img.has_transparency_data:
        return img if img.mode in ("RGB", "L", "CMYK") else img.convert("RGB")

    rgba = img.convert("RGBA")
    background = Image.new("RGB", rgba.size, (255, 255, 255))
    background.paste(rgba, mask=rgba.getchannel("A"))
    return background


@handle_codec_errors("JPEG")
def encode_jpeg(img: Image.Image, quality: int) -> bytes:
    """直接按质量进行有损 JPEG 编码"""
    return _save_to_bytes(_flatten_alpha(img), "JPEG", quality=quality)


@handle_codec_errors("WEBP")
def encode_webp(img: Image.Image, quality: int) -> bytes:
    """直接按质量进行有损 WebP 编码"""
    return _save_to_bytes(normalize_mode(img), "WEBP", quality=quality)


@handle_codec_errors("AVIF")
def encode_avif(img: Image.Image, quality: int, speed: int | None = None) -> bytes:
    """RGBA8 输入，固定速度参数的 AVIF 编码"""
    if speed is None:
        speed = get_config().compression.AVIF_SPEED
    return _save_to_bytes(img.convert("RGBA"), "AVIF", quality=quality, speed=speed)


@handle_codec_errors("PNG")
def encode_png(img: Image.Image, quality: int) -> bytes:
    """调色板量化 PNG 编码

    先计算调色板，再把像素重映射到调色板上。输出总是 8 位索引 PNG，
    调色板只有 RGB，透明度不保留。
    """
    rgb = img.convert("RGBA").convert("RGB")
    min_quality, max_quality = png_quality_range(quality)
    indexed = quantize(rgb, min_quality, max_quality)

    # bits=8 阻止 Pillow 为小调色板写出 1/2/4 位深度
    return _save_to_bytes(indexed, "PNG", bits=8)


@handle_codec_errors("GENERIC")
def encode_generic(img: Image.Image, format_tag: str) -> bytes:
    """按扩展名保存，未注册的扩展名回退为 JPEG"""
    pillow_format = ImageFormats.pillow_format_for(format_tag)
    if pillow_format == "JPEG":
        img = _flatten_alpha(img)
    return _save_to_bytes(img, pillow_format)


def png_quality_range(quality: int) -> tuple[int, int]:
    """质量映射为量化质量带 ``[max(0, q - 20), q]``"""
    band = get_config().compression.PNG_QUALITY_BAND
    return max(0, quality - band), quality


def palette_size_for(quality: int) -> int:
    """质量映射为调色板颜色数：2 的幂，范围 2-256"""
    exponent = math.ceil(quality * 8 / 100)
    return max(2, min(256, 2**exponent))


def quantize(rgb: Image.Image, min_quality: int, max_quality: int) -> Image.Image:
    """在质量带内选择满足误差要求的最小调色板

    Args:
        rgb: RGB 图片
        min_quality: 质量下限，决定最小调色板
        max_quality: 质量上限，决定最大调色板和误差容限

    Returns:
        Image.Image: P 模式图片
    """
    candidates = _palette_candidates(min_quality, max_quality)
    tolerance = (100 - max_quality) * _RMS_PER_QUALITY_POINT

    indexed = rgb
    for colors in candidates:
        # 第一阶段：计算调色板
        palette = rgb.quantize(colors=colors, method=Image.Quantize.MEDIANCUT)
        # 第二阶段：带抖动地重映射
        indexed = rgb.quantize(palette=palette, dither=Image.Dither.FLOYDSTEINBERG)

        if colors == candidates[-1] or _rms_error(rgb, indexed) <= tolerance:
            break

    logger.debug(
        f"PNG 量化: 质量 {min_quality}-{max_quality}, 候选 {candidates}, "
        f"模式 {indexed.mode}"
    )
    return indexed


@lru_cache(maxsize=128)
def _palette_candidates(min_quality: int, max_quality: int) -> tuple[int, ...]:
    smallest = palette_size_for(min_quality)
    largest = palette_size_for(max_quality)
    candidates = []
    colors = smallest
    while colors < largest:
        candidates.append(colors)
        colors *= 2
    candidates.append(largest)
    return tuple(candidates)


def _rms_error(original: Image.Image, indexed: Image.Image) -> float:
    diff = ImageChops.difference(original, indexed.convert("RGB"))
    return max(ImageStat.Stat(diff).rms)


@lru_cache(maxsize=1)
def avif_supported() -> bool:
    """检查当前 Pillow 是否能写出 AVIF"""
    try:
        test_img = Image.new("RGB", (1, 1), color="red")
        _save_to_bytes(test_img, "AVIF", quality=50)
        return True
    except Exception as e:
        logger.debug(f"格式 AVIF 不支持: {e}")
        return False
