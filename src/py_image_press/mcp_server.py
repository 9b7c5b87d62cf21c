"""批量图像压缩 MCP 服务器。

对外提供预估、批量压缩和元数据读取三个工具，每次调用记录引擎发出的事件并整理成响应。
"""

from typing import Any

from fastmcp import FastMCP

from .compressor import BatchCompressor, build_job_config
from .engine import EventEmitter, EventRecorder
from .exceptions import ValidationError
from .models import BatchSummary, ProcessResult
from .utils.logging_helpers import get_logger, setup_logging
from .utils.message_formatter import MessageFormatter


# MCP 服务器响应类型定义
MCPResponse = dict[str, Any]


class MCPResponseBuilder:
    """MCP 服务器响应构建器，专门用于构建符合 MCP 协议的响应格式。"""

    @staticmethod
    def error(
        message: str,
        error_type: str = "general",
        details: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """构建错误结果。

        Args:
            message: 错误消息
            error_type: 错误类型
            details: 额外的错误详情

        Returns:
            dict: 标准化的错误响应
        """
        result = {
            "success": False,
            "error": message,
            "error_type": error_type,
        }

        if details:
            result["details"] = details

        return result

    @staticmethod
    def validation_error(message: str, field: str | None = None) -> dict[str, Any]:
        """构建验证错误结果。"""
        details = {"field": field} if field else None
        return MCPResponseBuilder.error(
            message=message,
            error_type="validation",
            details=details,
        )

    @staticmethod
    def processing_error(message: str, operation: str | None = None) -> dict[str, Any]:
        """构建处理错误结果。"""
        details = {"operation": operation} if operation else None
        return MCPResponseBuilder.error(
            message=message,
            error_type="processing",
            details=details,
        )


logger = get_logger()

# 创建MCP应用
mcp: FastMCP[Any] = FastMCP("批量图像压缩服务")


def _recorded_compressor() -> tuple[BatchCompressor, EventRecorder]:
    emitter = EventEmitter()
    return BatchCompressor(emitter=emitter), EventRecorder(emitter)


def _serialize_events(recorder: EventRecorder) -> list[dict[str, Any]]:
    events = []
    for event, payload in recorder.events:
        if isinstance(payload, list):
            payload = [item.model_dump(mode="json") for item in payload]
        elif isinstance(payload, ProcessResult):
            payload = payload.model_dump(mode="json")
        events.append({"event": event.value, "payload": payload})
    return events


def run_preview(
    paths: list[str],
    output_dir: str,
    format: str,
    quality: int,
    max_width: int | None = None,
    max_height: int | None = None,
) -> MCPResponse:
    """执行预估并整理响应"""
    try:
        config = build_job_config(paths, output_dir, format, quality, max_width, max_height)
    except ValidationError as e:
        return MCPResponseBuilder.validation_error(e.message)

    compressor, recorder = _recorded_compressor()
    try:
        with compressor:
            previews = compressor.run_preview(config)
    except Exception as e:
        logger.error(MessageFormatter.operation_failed("预估", output_dir, e))
        return MCPResponseBuilder.processing_error(str(e), "预估")

    return {
        "success": True,
        "events": _serialize_events(recorder),
        "previews": [
            {**p.model_dump(mode="json"), "summary": p.get_summary()} for p in previews
        ],
    }


def run_compress(
    paths: list[str],
    output_dir: str,
    format: str,
    quality: int,
    max_width: int | None = None,
    max_height: int | None = None,
) -> MCPResponse:
    """执行批处理并整理响应"""
    try:
        config = build_job_config(paths, output_dir, format, quality, max_width, max_height)
    except ValidationError as e:
        return MCPResponseBuilder.validation_error(e.message)

    compressor, recorder = _recorded_compressor()
    try:
        with compressor:
            results = compressor.run_batch(config)
    except Exception as e:
        logger.error(MessageFormatter.operation_failed("批量压缩", output_dir, e))
        return MCPResponseBuilder.processing_error(str(e), "批量压缩")

    summary = BatchSummary(results=results)
    return {
        "success": True,
        "events": _serialize_events(recorder),
        "results": [r.model_dump(mode="json") for r in results],
        "successful_files": summary.get_success_count(),
        "failed_files": summary.get_failure_count(),
        "summary": summary.get_summary(),
    }


def run_metadata(paths: list[str]) -> MCPResponse:
    """读取元数据并整理响应"""
    compressor, _ = _recorded_compressor()
    with compressor:
        metadata = compressor.get_images_metadata(paths)
    return {
        "success": True,
        "images": [
            {
                **m.model_dump(mode="json"),
                "size_human": m.get_file_size_human(),
                "pixels_human": m.get_total_pixels_human(),
            }
            for m in metadata
        ],
    }


# ============================================================================
# 工具定义
# ============================================================================


@mcp.tool()
def preview_images(
    paths: list[str],
    output_dir: str,
    format: str,
    quality: int,
    max_width: int | None = None,
    max_height: int | None = None,
) -> MCPResponse:
    """预估每张图片压缩后的大小（不写入文件）。

    对缩小的代理图编码并按面积比例放大，结果是估计值。无法读取的文件不会出现在结果中。

    Args:
        paths: 输入图片路径
        output_dir: 输出目录（预估时不使用，与压缩参数保持一致）
        format: 目标格式 jpg/jpeg/png/webp/avif 或其他扩展名
        quality: 质量 0-100
        max_width: 最大宽度（像素）
        max_height: 最大高度（像素）
    """
    return run_preview(paths, output_dir, format, quality, max_width, max_height)


@mcp.tool()
def compress_images(
    paths: list[str],
    output_dir: str,
    format: str,
    quality: int,
    max_width: int | None = None,
    max_height: int | None = None,
) -> MCPResponse:
    """批量压缩图片，输出为 ``{stem}-compressed.{ext}``，不会覆盖已有文件。

    Args:
        paths: 输入图片路径，重复路径会分别处理
        output_dir: 输出目录
        format: 目标格式 jpg/jpeg/png/webp/avif 或其他扩展名
        quality: 质量 0-100
        max_width: 最大宽度（像素）
        max_height: 最大高度（像素）
    """
    return run_compress(paths, output_dir, format, quality, max_width, max_height)


@mcp.tool()
def get_images_metadata(paths: list[str]) -> MCPResponse:
    """读取图片尺寸和文件大小，只解析文件头。

    Args:
        paths: 图片路径
    """
    return run_metadata(paths)


# ============================================================================
# 应用入口
# ============================================================================


def main(log_level: str | None = None) -> None:
    """启动 MCP 服务器"""
    setup_logging(log_level)
    logger.info("启动批量图像压缩 MCP 服务器")
    mcp.run()


if __name__ == "__main__":
    main()
