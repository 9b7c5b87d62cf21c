"""统一配置管理模块。

提供应用程序的全局配置管理，包括默认值、环境变量支持等。
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class CompressionDefaults:
    """压缩相关的默认配置"""

    # AVIF 编码速度 (0=最慢最佳, 10=最快)，固定值保证输出稳定
    AVIF_SPEED: int = 4

    # PNG 量化质量带宽：下限为 quality - 20
    PNG_QUALITY_BAND: int = 20

    # 并发设置
    MAX_WORKERS: int = 4


@dataclass(frozen=True)
class ProcessingDefaults:
    """处理相关的默认配置"""

    # 预估时代理图的最大边长
    PROXY_SIZE: int = 256

    # 输出文件名后缀
    OUTPUT_SUFFIX: str = "-compressed"

    # 后台同时运行的任务数
    JOB_SLOTS: int = 4


@dataclass(frozen=True)
class LoggingDefaults:
    """日志相关的默认配置"""

    # 日志级别
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # 文件日志
    ENABLE_FILE_LOGGING: bool = False
    LOG_FILE_PATH: str = "py_image_press.log"
    LOG_FILE_MAX_SIZE: int = 10 * 1024 * 1024  # 10MB
    LOG_FILE_BACKUP_COUNT: int = 5


class AppConfig:
    """应用程序配置管理器

    支持环境变量覆盖默认配置
    """

    def __init__(self):
        self.compression = CompressionDefaults()
        self.processing = ProcessingDefaults()
        self.logging = LoggingDefaults()

        # 从环境变量加载配置
        self._load_from_env()

    def _load_from_env(self):
        """从环境变量加载配置"""
        # 压缩配置
        if max_workers := os.getenv("PRESS_MAX_WORKERS"):
            object.__setattr__(self.compression, "MAX_WORKERS", int(max_workers))

        if avif_speed := os.getenv("PRESS_AVIF_SPEED"):
            object.__setattr__(self.compression, "AVIF_SPEED", int(avif_speed))

        # 处理配置
        if proxy_size := os.getenv("PRESS_PROXY_SIZE"):
            object.__setattr__(self.processing, "PROXY_SIZE", int(proxy_size))

        # 日志配置
        if log_level := os.getenv("PRESS_LOG_LEVEL"):
            object.__setattr__(self.logging, "LOG_LEVEL", log_level.upper())

        if enable_file_log := os.getenv("PRESS_ENABLE_FILE_LOGGING"):
            object.__setattr__(
                self.logging,
                "ENABLE_FILE_LOGGING",
                enable_file_log.lower() in ("true", "1", "yes"),
            )


# 全局配置实例
config = AppConfig()


def get_config() -> AppConfig:
    """获取全局配置实例"""
    return config


def reset_config():
    """重置配置（主要用于测试）"""
    global config
    config = AppConfig()
