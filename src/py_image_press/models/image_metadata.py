"""图像元数据模型。

只包含尺寸与磁盘大小，读取时只解析文件头。
"""

from humanize import intword, naturalsize
from pydantic import BaseModel, Field, computed_field


class ImageMetadata(BaseModel):
    """基础图片信息"""

    path: str
    width: int = Field(description="图片宽度")
    height: int = Field(description="图片高度")
    size: int = Field(description="文件大小（字节）")

    @computed_field
    def total_pixels(self) -> int:
        """总像素数"""
        return self.width * self.height

    @computed_field
    def aspect_ratio(self) -> float:
        """宽高比"""
        return self.width / self.height if self.height > 0 else 0.0

    def get_total_pixels_human(self) -> str:
        """人性化显示总像素数"""
        return intword(self.width * self.height)

    def get_file_size_human(self) -> str:
        """人性化显示文件大小"""
        return naturalsize(self.size, binary=True)
