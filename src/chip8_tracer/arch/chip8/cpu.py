# src/chip8_tracer/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。
"""
import logging
from typing import Dict, List, Optional, Tuple

from chip8_tracer.core.cpu import AbstractCpu
from chip8_tracer.core.snapshot import Operation
from chip8_tracer.core.errors import MemoryRangeError, ProgramTooLargeError
from chip8_tracer.common.types import RegisterLayoutInfo, RegisterInfo
from chip8_tracer.transport.bus import Bus
from chip8_tracer.display.framebuffer import DisplayDevice, EdgePolicy
from chip8_tracer.arch.chip8.state import (
    Chip8CpuState, MEM_SIZE, PROGRAM_START, NUM_REGISTERS, DEFAULT_STACK_LIMIT, DEFAULT_TIMER_DIVIDER
)
from chip8_tracer.arch.chip8.decoder import Instruction, decode
from chip8_tracer.arch.chip8.instructions import ExecutionContext, execute_instruction
from chip8_tracer.arch.chip8 import disassembler

logger = logging.getLogger(__name__)

MAX_PROGRAM_SIZE = MEM_SIZE - PROGRAM_START

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行、タイマー）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 CPUをエミュレートするクラス。
    画面は DisplayDevice インターフェース経由で操作するため、描画面が無くても動作します。
    """
    # @intent:pre-condition busには0x000-0xFFFの4KBがマップされている必要があります。
    def __init__(self, bus: Bus, display: DisplayDevice,
                 stack_limit: Optional[int] = DEFAULT_STACK_LIMIT,
                 edge_policy: EdgePolicy = EdgePolicy.CLIP,
                 timer_divider: int = DEFAULT_TIMER_DIVIDER):
        if timer_divider <= 0:
            raise ValueError("timer_divider must be a positive integer.")
        self._display = display
        self._stack_limit = stack_limit
        self._edge_policy = edge_policy
        self._timer_divider = timer_divider
        self._opcode: int = 0x0000
        self._timer_cycles: int = 0
        super().__init__(bus)

    def _create_initial_state(self) -> Chip8CpuState:
        return Chip8CpuState()

    # @intent:responsibility 状態オブジェクトを作り直し、命令・タイマーの進行状況も初期化します。
    def reset(self) -> None:
        super().reset()
        self._opcode = 0x0000
        self._timer_cycles = 0

    def get_state(self) -> Chip8CpuState:
        return self._state

    @property
    def display(self) -> DisplayDevice:
        return self._display

    @property
    def opcode(self) -> int:
        return self._opcode

    @property
    def delay_timer(self) -> int:
        return self._state.delay_timer

    # @intent:responsibility プログラムイメージを0x200から配置し、全ての実行状態を新しく作り直します。
    # @intent:rationale 以前のプログラムのレジスタ、スタック、タイマー、画素が新しい実行に漏れないよう、
    #                  既存の状態を部分的に書き換えるのではなく新規生成します。
    def load_program(self, data: bytes) -> None:
        if len(data) > MAX_PROGRAM_SIZE:
            raise ProgramTooLargeError(
                f"Program of {len(data)} bytes does not fit in {MAX_PROGRAM_SIZE} bytes of program memory."
            )
        self._bus.reset()
        self.reset()
        self._display.reset()
        for offset, byte in enumerate(data):
            self._bus.load(PROGRAM_START + offset, byte)
        logger.info("Loaded %d byte program at %#05x", len(data), PROGRAM_START)

    # @intent:responsibility PCから2バイトをビッグエンディアンで読み、PCを2進めます。
    # @intent:pre-condition PCがメモリ末尾を超える場合は MemoryRangeError とします（ゴミを読まない）。
    def fetch(self) -> int:
        pc = self._state.pc
        if not 0 <= pc <= MEM_SIZE - 2:
            raise MemoryRangeError(f"Program counter {pc:#06x} outside fetchable memory.")
        self._opcode = (self._bus.read(pc) << 8) | self._bus.read(pc + 1)
        self._state.pc = pc + 2
        return self._opcode

    def decode(self) -> Instruction:
        return decode(self._opcode)

    # @intent:responsibility 格納済みのオペコードをデコードして実行し、遅延タイマーを1サイクル進めます。
    def execute(self) -> Operation:
        instr = self.decode()
        ctx = ExecutionContext(
            state=self._state,
            bus=self._bus,
            display=self._display,
            stack_limit=self._stack_limit,
            edge_policy=self._edge_policy,
        )
        execute_instruction(instr, ctx)
        self.tick_timer()
        return instr.to_operation()

    # @intent:responsibility 実行命令数に連動して遅延タイマーを減算します（壁時計ではありません）。
    def tick_timer(self) -> None:
        self._timer_cycles += 1
        if self._timer_cycles >= self._timer_divider:
            self._timer_cycles = 0
            if self._state.delay_timer > 0:
                self._state.delay_timer -= 1

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        reg_map = {f"V{n:X}": s.v[n] for n in range(NUM_REGISTERS)}
        reg_map.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer})
        return reg_map

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{n:X}", 8) for n in range(NUM_REGISTERS)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 12), RegisterInfo("PC", 12), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [RegisterInfo("DT", 8)]),
        ]

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return disassembler.disassemble(self._bus, start_addr, length)
