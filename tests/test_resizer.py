"""尺寸调整测试。"""

import pytest
from PIL import Image

from py_image_press.core.resizer import (
    FAST,
    HIGH_QUALITY,
    compute_scale,
    compute_target_size,
    needs_resize,
    resize_to_fit,
)


class TestComputeTargetSize:
    """目标尺寸计算测试"""

    @pytest.mark.parametrize(
        ("size", "caps"),
        [
            ((800, 600), (None, None)),
            ((800, 600), (800, 600)),
            ((800, 600), (1920, 1080)),
            ((800, 600), (None, 600)),
        ],
    )
    def test_no_op_when_within_caps(self, size, caps):
        """上限不小于原始尺寸时尺寸不变"""
        assert compute_target_size(*size, *caps) == size

    def test_never_upscales(self):
        """从不放大"""
        assert compute_target_size(100, 50, 1000, 1000) == (100, 50)

    def test_uses_smallest_scale(self):
        """取两个方向中更小的缩放系数"""
        assert compute_target_size(4000, 3000, 1920, 1080) == (1440, 1080)

    def test_single_axis_cap(self):
        """只限制一个方向"""
        assert compute_target_size(1000, 500, 300, None) == (300, 150)
        assert compute_target_size(1000, 500, None, 100) == (200, 100)

    @pytest.mark.parametrize(
        ("size", "caps"),
        [
            ((4000, 3000), (1920, 1080)),
            ((3000, 4000), (1920, 1080)),
            ((1001, 333), (500, None)),
            ((777, 1333), (None, 401)),
        ],
    )
    def test_aspect_ratio_preserved_within_caps(self, size, caps):
        """保持宽高比（±1px）且不超过任一上限"""
        width, height = size
        max_w, max_h = caps
        new_w, new_h = compute_target_size(width, height, max_w, max_h)

        if max_w is not None:
            assert new_w <= max_w
        if max_h is not None:
            assert new_h <= max_h
        scale = compute_scale(width, height, max_w, max_h)
        assert abs(new_w - width * scale) <= 1
        assert abs(new_h - height * scale) <= 1

    def test_minimum_one_pixel(self):
        """极端宽高比下短边至少 1 像素"""
        assert compute_target_size(1000, 1, 10, None) == (10, 1)


class TestResizeToFit:
    """图片缩放测试"""

    def test_returns_same_image_when_fits(self):
        img = Image.new("RGB", (300, 200))
        assert resize_to_fit(img, 300, 200) is img
        assert resize_to_fit(img, None, None) is img

    def test_resized_dimensions_match_target(self):
        img = Image.new("RGB", (1200, 800), color="green")
        resized = resize_to_fit(img, 500, 500, HIGH_QUALITY)
        assert resized.size == compute_target_size(1200, 800, 500, 500)

    def test_fast_filter(self):
        img = Image.new("RGB", (1200, 800), color="green")
        assert resize_to_fit(img, 256, 256, FAST).size == (256, 171)

    def test_needs_resize(self):
        assert needs_resize((100, 100), 99, None)
        assert needs_resize((100, 100), None, 99)
        assert not needs_resize((100, 100), 100, 100)
        assert not needs_resize((100, 100), None, None)


def checkerboard(size: int) -> Image.Image:
    """一像素黑白棋盘格，最近邻缩放后仍是纯黑白"""
    data = bytes(255 * ((x + y) % 2) for y in range(size) for x in range(size))
    return Image.frombytes("L", (size, size), data)


class TestResampleModes:
    """调色板与二值图缩放测试"""

    def test_palette_image_uses_requested_filter(self):
        img = checkerboard(400).convert("P")
        target = compute_target_size(400, 400, 100, 100)

        resized = resize_to_fit(img, 100, 100, HIGH_QUALITY)
        nearest = img.resize(target, Image.Resampling.NEAREST).convert("RGB")

        assert resized.mode == "RGB"
        assert resized.size == target
        assert resized.tobytes() != nearest.tobytes()
        # 高质量滤波把棋盘格平均成中间灰
        assert 0 < resized.convert("L").getextrema()[1] < 255

    def test_palette_with_transparency_keeps_alpha(self):
        img = checkerboard(200).convert("P")
        img.info["transparency"] = 0

        resized = resize_to_fit(img, 50, 50, HIGH_QUALITY)

        assert resized.mode == "RGBA"
        assert resized.size == (50, 50)

    def test_bilevel_image_expanded_to_grayscale(self):
        img = checkerboard(200).convert("1")

        resized = resize_to_fit(img, 50, 50, FAST)

        assert resized.mode == "L"

    def test_palette_image_untouched_when_fits(self):
        img = checkerboard(40).convert("P")
        assert resize_to_fit(img, 100, 100) is img
