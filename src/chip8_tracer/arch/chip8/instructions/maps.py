# src/chip8_tracer/arch/chip8/instructions/maps.py
"""
CHIP-8 命令ファミリーと実行関数の対応表。
表に無いファミリー（SYS, UNSUPPORTED）は実行時に何もしません。
"""
from typing import Dict

from chip8_tracer.arch.chip8.decoder import Family
from chip8_tracer.arch.chip8.instructions.base import ExecFunc
from chip8_tracer.arch.chip8.instructions import control, load, alu, display

EXECUTE_MAP: Dict[Family, ExecFunc] = {
    Family.CLS: display.execute_cls,
    Family.RET: control.execute_ret,
    Family.JP: control.execute_jp,
    Family.CALL: control.execute_call,
    Family.SE_BYTE: control.execute_se_byte,
    Family.SNE_BYTE: control.execute_sne_byte,
    Family.SE_REG: control.execute_se_reg,
    Family.LD_BYTE: load.execute_ld_byte,
    Family.ADD_BYTE: load.execute_add_byte,
    Family.ALU: alu.execute_alu,
    Family.SNE_REG: control.execute_sne_reg,
    Family.LD_I: load.execute_ld_i,
    Family.DRW: display.execute_drw,
}
