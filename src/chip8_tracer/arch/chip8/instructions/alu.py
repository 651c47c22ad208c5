# src/chip8_tracer/arch/chip8/instructions/alu.py
"""
CHIP-8 算術論理演算命令 (8xyN)。

フラグは演算前の値から計算します。VFへの書き込み順はサブ命令ごとに決まっており、
x == F の場合、ADD (8xy4) ではフラグが、SUB/SHR/SUBN/SHL では結果が最終的にVFに残ります。
"""
import logging
from typing import Callable, Dict, Optional, Tuple

from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.decoder import Instruction
from chip8_tracer.arch.chip8.instructions.base import ExecutionContext

logger = logging.getLogger(__name__)

# (result, flag) を返す。flagがNoneならVFは変更しない。
AluFunc = Callable[[int, int], Tuple[int, Optional[int]]]

def _ld(vx: int, vy: int):
    return vy, None

def _or(vx: int, vy: int):
    return vx | vy, None

def _and(vx: int, vy: int):
    return vx & vy, None

def _xor(vx: int, vy: int):
    return vx ^ vy, None

def _add(vx: int, vy: int):
    total = vx + vy
    return total & 0xFF, 1 if total > 0xFF else 0

def _sub(vx: int, vy: int):
    return (vx - vy) & 0xFF, 1 if vx > vy else 0

# @intent:note Vyは参照しません（シフト対象はVxのみ）。
def _shr(vx: int, vy: int):
    return vx >> 1, vx & 0x1

def _subn(vx: int, vy: int):
    return (vy - vx) & 0xFF, 1 if vy > vx else 0

def _shl(vx: int, vy: int):
    return (vx << 1) & 0xFF, (vx >> 7) & 0x1

ALU_MAP: Dict[int, AluFunc] = {
    0x0: _ld,
    0x1: _or,
    0x2: _and,
    0x3: _xor,
    0x4: _add,
    0x5: _sub,
    0x6: _shr,
    0x7: _subn,
    0xE: _shl,
}

# VFを先に書き、結果を後から書くサブ命令 (SUB, SHR, SUBN, SHL)。
# ADDだけは結果の後にVFを書くため、x == F の場合の最終値が異なる。
FLAG_FIRST = frozenset({0x5, 0x6, 0x7, 0xE})

def _write_result(state: Chip8CpuState, x: int, result: int, flag: Optional[int], flag_first: bool) -> None:
    if flag is None:
        state.v[x] = result
    elif flag_first:
        state.vf = flag
        state.v[x] = result
    else:
        state.v[x] = result
        state.vf = flag

# --- 8xyN ---
# @intent:responsibility 下位ニブルでサブ命令を選択して実行します。未定義のサブ命令は何もしません。
def execute_alu(ctx: ExecutionContext, instr: Instruction) -> None:
    func = ALU_MAP.get(instr.n)
    if func is None:
        logger.debug("Ignoring undefined ALU opcode %04X", instr.opcode)
        return
    state = ctx.state
    result, flag = func(state.v[instr.x], state.v[instr.y])
    _write_result(state, instr.x, result, flag, instr.n in FLAG_FIRST)
