# src/chip8_tracer/ui/app.py
"""
Qtアプリケーションのエントリポイント。
引数にROM（.ch8）またはシステム設定（.yaml）を指定すると、起動時に読み込みます。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import SystemConfig
from .main_window import MainWindow

CONFIG_SUFFIXES = (".yaml", ".yml")

def _parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="chip8-tracer", description="CHIP-8 interpreter and tracer")
    parser.add_argument("path", nargs="?", help="ROM image (.ch8) or system config (.yaml)")
    parser.add_argument("--verbose", "-v", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)

# @intent:responsibility 起動引数から初期のシステム構成を決定します。
def build_initial_config(path: Optional[str]) -> SystemConfig:
    if path and path.lower().endswith(CONFIG_SUFFIXES):
        return ConfigLoader().load_from_file(path)
    return SystemConfig(program=path)

# @intent:responsibility アプリケーションを起動し、メインウィンドウを表示します。
def main(argv: Optional[List[str]] = None):
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    main_win = MainWindow(build_initial_config(args.path))
    main_win.show()
    sys.exit(app.exec())

if __name__ == '__main__':
    main()
