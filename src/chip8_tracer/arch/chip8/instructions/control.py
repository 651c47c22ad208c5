# src/chip8_tracer/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
実行時点でPCは既に次の命令（フェッチ位置+2）を指しています。
"""
from chip8_tracer.core.errors import StackUnderflowError, StackOverflowError
from chip8_tracer.arch.chip8.decoder import Instruction
from chip8_tracer.arch.chip8.instructions.base import ExecutionContext

# --- RET (00EE) ---
# @intent:responsibility コールスタックから戻りアドレスを取り出します。
# @intent:pre-condition スタックが空の場合はプログラム側の誤りとして StackUnderflowError を送出します。
def execute_ret(ctx: ExecutionContext, instr: Instruction) -> None:
    state = ctx.state
    if not state.stack:
        raise StackUnderflowError(f"RET with empty call stack at PC {(state.pc - 2) & 0xFFFF:#05x}.")
    state.pc = state.stack.pop()

# --- JP (1nnn) ---
def execute_jp(ctx: ExecutionContext, instr: Instruction) -> None:
    ctx.state.pc = instr.nnn

# --- CALL (2nnn) ---
# @intent:responsibility 戻りアドレス（現在のPC）を積んでサブルーチンへ分岐します。
def execute_call(ctx: ExecutionContext, instr: Instruction) -> None:
    state = ctx.state
    if ctx.stack_limit is not None and len(state.stack) >= ctx.stack_limit:
        raise StackOverflowError(f"Call stack limit ({ctx.stack_limit}) exceeded calling ${instr.nnn:03X}.")
    state.stack.append(state.pc)
    state.pc = instr.nnn

def _skip(ctx: ExecutionContext) -> None:
    ctx.state.pc += 2

# --- SE Vx, byte (3xkk) ---
def execute_se_byte(ctx: ExecutionContext, instr: Instruction) -> None:
    if ctx.state.v[instr.x] == instr.kk:
        _skip(ctx)

# --- SNE Vx, byte (4xkk) ---
def execute_sne_byte(ctx: ExecutionContext, instr: Instruction) -> None:
    if ctx.state.v[instr.x] != instr.kk:
        _skip(ctx)

# --- SE Vx, Vy (5xy0) ---
def execute_se_reg(ctx: ExecutionContext, instr: Instruction) -> None:
    if ctx.state.v[instr.x] == ctx.state.v[instr.y]:
        _skip(ctx)

# --- SNE Vx, Vy (9xy0) ---
def execute_sne_reg(ctx: ExecutionContext, instr: Instruction) -> None:
    if ctx.state.v[instr.x] != ctx.state.v[instr.y]:
        _skip(ctx)
