# src/chip8_tracer/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
import logging

from chip8_tracer.arch.chip8.decoder import Instruction
from .base import ExecutionContext
from .maps import EXECUTE_MAP

logger = logging.getLogger(__name__)

# @intent:responsibility デコードされたCHIP-8命令を実行します。
# @intent:rationale 未対応オペコードは例外にせず no-op とし、未実装命令を含むROMでも実行を継続できるようにします。
def execute_instruction(instr: Instruction, ctx: ExecutionContext) -> None:
    """
    命令ファミリーに対応する実行関数を呼び出し、CPUの状態を変更します。
    """
    executor = EXECUTE_MAP.get(instr.family)
    if executor is None:
        logger.debug("Ignoring unsupported opcode %04X (%s)", instr.opcode, instr.family.value)
        return
    executor(ctx, instr)
