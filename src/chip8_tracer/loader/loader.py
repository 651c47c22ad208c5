# chip8_tracer/loader/loader.py
"""
プログラムローダーモジュール。
ヘッダを持たない生バイナリ形式（.ch8）のプログラムイメージを読み込みます。
"""
import logging
from pathlib import Path
from typing import Union

from chip8_tracer.core.errors import ProgramTooLargeError
from chip8_tracer.arch.chip8.cpu import Chip8Cpu, MAX_PROGRAM_SIZE

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

class BinaryLoader:
    """
    生バイナリのプログラムイメージを読み込み、CPUに配置するローダー。
    """
    # @intent:responsibility ファイル全体をバイト列として読み込みます。
    # @intent:post-condition プログラム領域に収まらない場合は状態に触れる前に ProgramTooLargeError を送出します。
    def load_file(self, file_path: PathLike) -> bytes:
        with open(file_path, 'rb') as f:
            data = f.read()
        if len(data) > MAX_PROGRAM_SIZE:
            raise ProgramTooLargeError(
                f"{file_path}: {len(data)} bytes exceeds the {MAX_PROGRAM_SIZE} byte program area."
            )
        logger.info("Read program image %s (%d bytes)", file_path, len(data))
        return data

    # @intent:responsibility ファイルを読み込み、CPUの状態を作り直した上で0x200から配置します。
    def load_into(self, file_path: PathLike, cpu: Chip8Cpu) -> bytes:
        data = self.load_file(file_path)
        cpu.load_program(data)
        return data
