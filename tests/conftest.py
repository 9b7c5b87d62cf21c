"""测试配置文件。

提供测试所需的fixtures和配置。
"""

import tempfile
from pathlib import Path

import pytest
from PIL import Image, ImageDraw


def make_image(
    path: Path,
    size: tuple[int, int],
    mode: str = "RGB",
    fmt: str | None = None,
) -> Path:
    """生成带图案的测试图片，避免纯色图片压缩结果过于特殊"""
    width, height = size
    background = (0, 0, 0, 0) if mode == "RGBA" else "white"
    img = Image.new(mode, size, color=background)
    draw = ImageDraw.Draw(img)
    for i in range(40):
        x, y = (i * 37) % width, (i * 23) % height
        color = (i * 5 % 256, i * 7 % 256, i * 11 % 256)
        if mode == "RGBA":
            color = (*color, 100 + (i * 15) % 155)
        draw.rectangle([x, y, x + width // 8, y + height // 8], fill=color)
    path.parent.mkdir(parents=True, exist_ok=True)
    img.save(path, fmt)
    return path


@pytest.fixture
def temp_dir():
    """临时目录fixture"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def output_dir(temp_dir: Path) -> Path:
    """输出目录fixture"""
    out = temp_dir / "out"
    out.mkdir()
    return out


@pytest.fixture
def sample_images(temp_dir: Path) -> dict[str, Path]:
    """生成不同尺寸和模式的素材图片"""
    src = temp_dir / "src"
    return {
        "large": make_image(src / "large.jpg", (1200, 800)),
        "portrait": make_image(src / "portrait.png", (600, 900)),
        "small": make_image(src / "small.png", (120, 80)),
        "transparent": make_image(src / "transparent.png", (400, 400), mode="RGBA"),
    }


def create_config(**kwargs):
    """创建完整的JobConfig，提供默认值"""
    from py_image_press.models.job_config import JobConfig

    defaults = {
        "paths": (),
        "output_dir": Path("out"),
        "format": "jpg",
        "quality": 80,
        "max_width": None,
        "max_height": None,
    }
    defaults.update(kwargs)
    if "paths" in kwargs:
        defaults["paths"] = tuple(str(p) for p in kwargs["paths"])
    return JobConfig(**defaults)
