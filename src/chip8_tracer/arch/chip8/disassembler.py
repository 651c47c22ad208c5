# src/chip8_tracer/arch/chip8/disassembler.py
"""
CHIP-8 逆アセンブラ。
"""
from typing import List, Tuple

from chip8_tracer.transport.bus import Bus
from chip8_tracer.arch.chip8.decoder import decode

# @intent:responsibility メモリ上の命令列をニーモニックに変換します。
# @intent:rationale Bus.peekを使い、逆アセンブル自体がバスアクティビティとして記録されないようにします。
def disassemble(bus: Bus, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
    """
    start_addrからlength命令分を逆アセンブルし、(address, hex, text) のリストを返します。
    マップ外に達した時点で打ち切ります。
    """
    result = []
    addr = start_addr
    for _ in range(length):
        try:
            opcode = (bus.peek(addr) << 8) | bus.peek(addr + 1)
        except IndexError:
            break
        instr = decode(opcode)
        text = instr.mnemonic
        if instr.operands:
            text += " " + ", ".join(instr.operands)
        result.append((addr, instr.opcode_hex, text))
        addr += 2
    return result
