"""命令行入口：``python -m py_image_press`` 或 ``py-image-press``，启动 MCP 服务器。"""

import argparse
from collections.abc import Sequence

from . import __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="py-image-press", description="批量图像压缩 MCP 服务器 (stdio)"
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"py-image-press {__version__}"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="日志级别，默认取 PRESS_LOG_LEVEL",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    # 延迟导入，--version 不需要加载 fastmcp
    from .mcp_server import main as server_main

    server_main(log_level=args.log_level)


if __name__ == "__main__":
    main()
