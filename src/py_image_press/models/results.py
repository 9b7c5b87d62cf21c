"""处理结果模型。

定义批处理单项结果、预估结果以及批量汇总。
"""

from enum import Enum
from pathlib import Path

from humanize import naturalsize
from pydantic import BaseModel, Field


class ProcessStatus(str, Enum):
    """单项处理的终态"""

    SUCCESS = "success"
    ERROR = "error"


class ProcessResult(BaseModel):
    """单个文件的处理结果，每个输入路径每次批处理恰好一个"""

    original: str = Field(description="原始文件路径")
    status: ProcessStatus = Field(description="处理状态")
    error_msg: str | None = Field(None, description="错误信息")
    new_path: str | None = Field(None, description="输出文件路径")

    @classmethod
    def succeeded(cls, original: str, new_path: str | Path) -> "ProcessResult":
        return cls(original=original, status=ProcessStatus.SUCCESS, new_path=str(new_path))

    @classmethod
    def failed(cls, original: str, error_msg: str) -> "ProcessResult":
        return cls(original=original, status=ProcessStatus.ERROR, error_msg=error_msg)

    @property
    def success(self) -> bool:
        return self.status == ProcessStatus.SUCCESS


class PreviewResult(BaseModel):
    """单个文件的压缩大小预估"""

    path: str = Field(description="原始文件路径")
    original_size: int = Field(ge=0, description="原始文件大小（字节）")
    preview_size: int = Field(ge=0, description="预估输出大小（字节）")

    def get_estimated_saving(self) -> int:
        """预估节省的字节数"""
        return max(0, self.original_size - self.preview_size)

    def get_estimated_ratio(self) -> float:
        """预估压缩比例（百分比）"""
        if self.original_size == 0:
            return 0.0
        return (self.get_estimated_saving() / self.original_size) * 100

    def get_summary(self) -> str:
        """预估摘要"""
        return (
            f"{naturalsize(self.original_size, binary=True)} → "
            f"~{naturalsize(self.preview_size, binary=True)} "
            f"({self.get_estimated_ratio():.1f}% 预计压缩)"
        )


class BatchSummary(BaseModel):
    """批量处理汇总"""

    results: list[ProcessResult] = Field(default_factory=list, description="所有结果")

    def get_total_count(self) -> int:
        return len(self.results)

    def get_success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    def get_failure_count(self) -> int:
        return self.get_total_count() - self.get_success_count()

    def get_success_rate(self) -> float:
        """获取成功率（百分比）"""
        total = self.get_total_count()
        if total == 0:
            return 0.0
        return (self.get_success_count() / total) * 100

    def get_total_output_size(self) -> int:
        """已写出文件的总大小"""
        total = 0
        for result in self.results:
            if result.success and result.new_path:
                try:
                    total += Path(result.new_path).stat().st_size
                except OSError:
                    continue
        return total

    def get_summary(self) -> str:
        """批量处理摘要"""
        return (
            f"处理 {self.get_success_count()}/{self.get_total_count()} 个文件 "
            f"(成功率 {self.get_success_rate():.1f}%), "
            f"输出共 {naturalsize(self.get_total_output_size(), binary=True)}"
        )
