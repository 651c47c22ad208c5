# src/chip8_tracer/arch/chip8/instructions/display.py
"""
画面命令（CLS, DRW）の実装。
"""
from typing import Optional, Tuple

from chip8_tracer.display.framebuffer import DisplayDevice, EdgePolicy
from chip8_tracer.arch.chip8.decoder import Instruction
from chip8_tracer.arch.chip8.instructions.base import ExecutionContext

SPRITE_WIDTH = 8
SPRITE_MASK = 0x80

# --- CLS (00E0) ---
def execute_cls(ctx: ExecutionContext, instr: Instruction) -> None:
    ctx.display.clear()

# @intent:responsibility 画面外の座標をエッジポリシーに従って解決します。
# @intent:post-condition CLIPで画面外の場合はNoneを返します。
def resolve_coordinate(display: DisplayDevice, policy: EdgePolicy, x: int, y: int) -> Optional[Tuple[int, int]]:
    if policy == EdgePolicy.WRAP:
        return x % display.width, y % display.height
    if 0 <= x < display.width and 0 <= y < display.height:
        return x, y
    return None

# --- DRW Vx, Vy, n (Dxyn) ---
# @intent:responsibility メモリ[I]からn行のスプライトを読み、XORで画面に描画します。
# @intent:note 座標はVFを0クリアする前に読みます（x or y が F の場合に備える）。
#              衝突判定は反転前の画素値で行います。
def execute_drw(ctx: ExecutionContext, instr: Instruction) -> None:
    state = ctx.state
    display = ctx.display
    vx = state.v[instr.x]
    vy = state.v[instr.y]
    state.vf = 0

    for row in range(instr.n):
        sprite_data = ctx.bus.read(state.i + row)
        for col in range(SPRITE_WIDTH):
            if not sprite_data & (SPRITE_MASK >> col):
                continue
            coord = resolve_coordinate(display, ctx.edge_policy, vx + col, vy + row)
            if coord is None:
                continue
            if display.toggle_pixel(*coord) == 1:
                state.vf = 1

    display.mark_dirty()
