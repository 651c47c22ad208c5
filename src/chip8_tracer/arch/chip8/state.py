# src/chip8_tracer/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from chip8_tracer.core.state import CpuState

# @intent:constant CHIP-8マシンモデルの固定パラメータ。
MEM_SIZE = 4096
PROGRAM_START = 0x200
NUM_REGISTERS = 16
FLAG_REGISTER = 0xF
DEFAULT_STACK_LIMIT = 16   # 実機のネスト上限
DEFAULT_TIMER_DIVIDER = 16 # 遅延タイマーを1減らすまでの実行命令数

# @intent:responsibility CHIP-8の全てのレジスタ（V0-VF, I, PC）、コールスタック、遅延タイマーを保持します。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    プログラムの再ロード時は既存インスタンスを書き換えず、新しいインスタンスを生成します。
    """
    pc: int = PROGRAM_START
    v: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS)
    i: int = 0x000            # Index Register (12bit)
    stack: List[int] = field(default_factory=list)
    delay_timer: int = 0

    # @intent:accessor スタックポインタはスタックの深さそのものです。
    @property
    def sp(self) -> int:
        return len(self.stack)

    # @intent:accessor キャリー/ボロー/衝突フラグを兼ねるVFへのアクセサ。
    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF
