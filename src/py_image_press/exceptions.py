"""图像压缩异常处理模块。

定义统一的异常类和错误处理机制，包含编码器异常转换装饰器。
"""

from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import TypeVar

from .models.results import ProcessResult
from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter


logger = get_logger()
T = TypeVar("T")


# 统一的异常类型
class CompressionError(Exception):
    """压缩相关错误基类"""

    def __init__(self, message: str, input_path: Path | str | None = None):
        super().__init__(message)
        self.message = message
        self.input_path = input_path


class ValidationError(CompressionError):
    """参数验证错误 - 统一的验证错误类型"""

    pass


class ProcessingError(CompressionError):
    """处理过程错误"""

    pass


class EncodeError(ProcessingError):
    """编码器或量化器失败"""

    pass


def handle_codec_errors(format_name: str):
    """编码器异常转换装饰器

    将底层库抛出的任何异常转换为 EncodeError，保留原始信息。

    Args:
        format_name: 格式名称，用于错误消息和日志记录
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except CompressionError:
                raise
            except Exception as e:
                message = MessageFormatter.encode_failed(format_name, e)
                logger.debug(message)
                raise EncodeError(message) from e

        return wrapper

    return decorator


class ErrorHandler:
    """统一错误处理器

    提供标准化的错误处理和日志记录功能。
    """

    @staticmethod
    def _log_error(
        operation: str, path: Path | str, error: Exception, level: str = "error"
    ) -> None:
        """标准化的错误日志记录

        Args:
            operation: 操作名称（如"图像压缩"、"文件写入"等）
            path: 相关文件路径
            error: 异常对象
            level: 日志级别 ("error", "warning", "debug")
        """
        log_msg = MessageFormatter.format_error(operation, path, error)
        getattr(logger, level, logger.error)(log_msg)

    @staticmethod
    def handle_open_error(error: Exception, input_path: str) -> ProcessResult:
        """打开或解码失败，对外统一报告为 "Open failed" """
        ErrorHandler._log_error("打开图像", input_path, error, "warning")
        return ProcessResult.failed(input_path, MessageFormatter.OPEN_FAILED)

    @staticmethod
    def handle_with_context(
        error: Exception,
        input_path: str,
        operation: str = "未知操作",
        log_level: str = "error",
    ) -> ProcessResult:
        """记录上下文并生成失败结果，错误信息取自异常本身"""
        ErrorHandler._log_error(operation, input_path, error, log_level)
        message = error.message if isinstance(error, CompressionError) else str(error)
        return ProcessResult.failed(input_path, message or type(error).__name__)

    @staticmethod
    def handle_compression_error(
        error: Exception, input_path: str, operation: str = "图像压缩"
    ) -> ProcessResult:
        """统一的压缩错误处理，按异常类型分发日志级别"""
        match error:
            case EncodeError() as ee:
                return ErrorHandler.handle_with_context(
                    ee, input_path, f"{operation} - 编码", log_level="warning"
                )
            case PermissionError() as pe:
                return ErrorHandler.handle_with_context(
                    pe, input_path, f"{operation} - 权限错误", log_level="error"
                )
            case OSError() as ose:
                return ErrorHandler.handle_with_context(
                    ose, input_path, f"{operation} - 写入失败", log_level="error"
                )
            case _:
                return ErrorHandler.handle_with_context(
                    error, input_path, operation, log_level="error"
                )
