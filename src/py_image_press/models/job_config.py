"""任务配置模型。

一次批处理或预估的输入参数，批处理开始后不可修改，按引用共享给所有工作线程。
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import QualityDefaults, ValidationLimits


class JobConfig(BaseModel):
    """任务配置"""

    model_config = ConfigDict(frozen=True)

    paths: tuple[str, ...] = Field(description="输入文件路径，允许重复")
    output_dir: Path = Field(description="输出目录")
    format: str = Field(description="目标格式标签")
    quality: int = Field(
        ge=QualityDefaults.MIN_QUALITY,
        le=QualityDefaults.MAX_QUALITY,
        description="压缩质量，含义随格式而定",
    )
    max_width: int | None = Field(
        None, gt=0, le=ValidationLimits.MAX_DIMENSION, description="最大宽度"
    )
    max_height: int | None = Field(
        None, gt=0, le=ValidationLimits.MAX_DIMENSION, description="最大高度"
    )

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        v = v.strip().lower().lstrip(".")
        if not v:
            raise ValueError("格式不能为空")
        return v
