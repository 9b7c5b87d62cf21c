"""尺寸调整模块。

在独立的宽高上限内等比缩放，从不放大。最终输出使用高质量滤波，预估使用快速滤波。
"""

from PIL import Image


# 最终输出：Lanczos；预估：双线性（只关心相对大小）
HIGH_QUALITY = Image.Resampling.LANCZOS
FAST = Image.Resampling.BILINEAR


def compute_scale(
    width: int, height: int, max_width: int | None, max_height: int | None
) -> float:
    """计算统一缩放系数，缺省的上限视为不限制"""
    scale = 1.0
    if max_width is not None:
        scale = min(scale, max_width / width)
    if max_height is not None:
        scale = min(scale, max_height / height)
    return scale


def compute_target_size(
    width: int, height: int, max_width: int | None, max_height: int | None
) -> tuple[int, int]:
    """计算目标尺寸

    Args:
        width: 原始宽度
        height: 原始高度
        max_width: 最大宽度，None 为不限制
        max_height: 最大高度，None 为不限制

    Returns:
        tuple[int, int]: 保持宽高比且不超过任一上限的尺寸
    """
    scale = compute_scale(width, height, max_width, max_height)
    if scale >= 1.0:
        return width, height

    new_width = max(1, round(width * scale))
    new_height = max(1, round(height * scale))

    # 舍入不得越过上限
    if max_width is not None:
        new_width = min(new_width, max_width)
    if max_height is not None:
        new_height = min(new_height, max_height)
    return new_width, new_height


def needs_resize(
    size: tuple[int, int], max_width: int | None, max_height: int | None
) -> bool:
    """图片是否超出任一上限"""
    width, height = size
    return (max_width is not None and width > max_width) or (
        max_height is not None and height > max_height
    )


def resampling_mode(img: Image.Image) -> Image.Image:
    """Pillow 对 P 和 1 模式只做最近邻采样，缩放前先展开为连续色调"""
    if img.mode == "P":
        return img.convert("RGBA" if img.has_transparency_data else "RGB")
    if img.mode == "1":
        return img.convert("L")
    return img


def resize_to_fit(
    img: Image.Image,
    max_width: int | None,
    max_height: int | None,
    resample: Image.Resampling = HIGH_QUALITY,
) -> Image.Image:
    """按上限等比缩放图片，未超出上限时原样返回同一对象"""
    if not needs_resize(img.size, max_width, max_height):
        return img

    target = compute_target_size(img.width, img.height, max_width, max_height)
    return resampling_mode(img).resize(target, resample)
