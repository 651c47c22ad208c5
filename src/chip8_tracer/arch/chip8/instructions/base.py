# src/chip8_tracer/arch/chip8/instructions/base.py
"""
CHIP-8 命令実行の共通定義。
"""
from dataclasses import dataclass
from typing import Callable, Optional

from chip8_tracer.transport.bus import Bus
from chip8_tracer.display.framebuffer import DisplayDevice, EdgePolicy
from chip8_tracer.arch.chip8.state import Chip8CpuState
from chip8_tracer.arch.chip8.decoder import Instruction

# @intent:responsibility 1命令の実行に必要な協調オブジェクトをまとめます。
# @intent:rationale 実行関数のシグネチャをファミリー間で統一し、実行表から一律に呼び出せるようにします。
@dataclass
class ExecutionContext:
    state: Chip8CpuState
    bus: Bus
    display: DisplayDevice
    stack_limit: Optional[int] = None  # Noneは上限なし
    edge_policy: EdgePolicy = EdgePolicy.CLIP

# Execution Function Type
ExecFunc = Callable[[ExecutionContext, Instruction], None]
