# src/chip8_tracer/arch/chip8/instructions/load.py
"""
即値ロード・即値加算・インデックス設定命令の実装。
"""
from chip8_tracer.arch.chip8.decoder import Instruction
from chip8_tracer.arch.chip8.instructions.base import ExecutionContext

# --- LD Vx, byte (6xkk) ---
def execute_ld_byte(ctx: ExecutionContext, instr: Instruction) -> None:
    ctx.state.v[instr.x] = instr.kk

# --- ADD Vx, byte (7xkk) ---
# @intent:note キャリーは捨てられ、VFは変化しません。
def execute_add_byte(ctx: ExecutionContext, instr: Instruction) -> None:
    ctx.state.v[instr.x] = (ctx.state.v[instr.x] + instr.kk) & 0xFF

# --- LD I, addr (Annn) ---
def execute_ld_i(ctx: ExecutionContext, instr: Instruction) -> None:
    ctx.state.i = instr.nnn
