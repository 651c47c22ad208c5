# src/chip8_tracer/arch/chip8/decoder.py
"""
CHIP-8 命令デコーダ。

16bitオペコードを一度だけビット分解し、命令ファミリーのタグとオペランドフィールドを持つ
Instruction 値に変換します。実行側・逆アセンブラ側はこの値だけを参照し、
ビットマスク処理を重複して持ちません。
"""
from dataclasses import dataclass
from enum import Enum

from chip8_tracer.core.snapshot import Operation

# @intent:responsibility 命令ファミリーのタグを定義します。
class Family(Enum):
    CLS = "CLS"                 # 00E0
    RET = "RET"                 # 00EE
    SYS = "SYS"                 # 0nnn (ネイティブルーチン呼び出し。無視する)
    JP = "JP"                   # 1nnn
    CALL = "CALL"               # 2nnn
    SE_BYTE = "SE_BYTE"         # 3xkk
    SNE_BYTE = "SNE_BYTE"       # 4xkk
    SE_REG = "SE_REG"           # 5xy0
    LD_BYTE = "LD_BYTE"         # 6xkk
    ADD_BYTE = "ADD_BYTE"       # 7xkk
    ALU = "ALU"                 # 8xyN
    SNE_REG = "SNE_REG"         # 9xy0
    LD_I = "LD_I"               # Annn
    DRW = "DRW"                 # Dxyn
    UNSUPPORTED = "UNSUPPORTED" # B, C, E, F ファミリー

CLEAR_SCREEN = 0x00E0
SUBROUTINE_RETURN = 0x00EE

_FAMILY_BY_NIBBLE = {
    0x0: Family.SYS,
    0x1: Family.JP,
    0x2: Family.CALL,
    0x3: Family.SE_BYTE,
    0x4: Family.SNE_BYTE,
    0x5: Family.SE_REG,
    0x6: Family.LD_BYTE,
    0x7: Family.ADD_BYTE,
    0x8: Family.ALU,
    0x9: Family.SNE_REG,
    0xA: Family.LD_I,
    0xD: Family.DRW,
}

# ALUサブ命令 (下位ニブル) のニーモニック
ALU_MNEMONICS = {
    0x0: "LD",
    0x1: "OR",
    0x2: "AND",
    0x3: "XOR",
    0x4: "ADD",
    0x5: "SUB",
    0x6: "SHR",
    0x7: "SUBN",
    0xE: "SHL",
}

# @intent:responsibility デコード済みの1命令を表す不変値。
@dataclass(frozen=True)
class Instruction:
    family: Family
    opcode: int
    x: int    # bits 8-11
    y: int    # bits 4-7
    n: int    # bits 0-3
    kk: int   # bits 0-7
    nnn: int  # bits 0-11

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    @property
    def mnemonic(self) -> str:
        f = self.family
        if f in (Family.SE_BYTE, Family.SE_REG):
            return "SE"
        if f in (Family.SNE_BYTE, Family.SNE_REG):
            return "SNE"
        if f in (Family.LD_BYTE, Family.LD_I):
            return "LD"
        if f == Family.ADD_BYTE:
            return "ADD"
        if f == Family.ALU:
            return ALU_MNEMONICS.get(self.n, "UNKNOWN")
        if f == Family.UNSUPPORTED:
            return "UNKNOWN"
        return f.value

    @property
    def operands(self) -> list:
        f = self.family
        vx = f"V{self.x:X}"
        vy = f"V{self.y:X}"
        if f in (Family.SYS, Family.JP, Family.CALL):
            return [f"${self.nnn:03X}"]
        if f in (Family.SE_BYTE, Family.SNE_BYTE, Family.LD_BYTE, Family.ADD_BYTE):
            return [vx, f"#${self.kk:02X}"]
        if f in (Family.SE_REG, Family.SNE_REG):
            return [vx, vy]
        if f == Family.ALU:
            if self.n not in ALU_MNEMONICS:
                return [f"${self.opcode:04X}"]
            if self.n in (0x6, 0xE):
                return [vx]
            return [vx, vy]
        if f == Family.LD_I:
            return ["I", f"${self.nnn:03X}"]
        if f == Family.DRW:
            return [vx, vy, str(self.n)]
        if f == Family.UNSUPPORTED:
            return [f"${self.opcode:04X}"]
        return []

    # @intent:responsibility Snapshotに格納する汎用のOperation記録へ変換します。
    def to_operation(self) -> Operation:
        return Operation(opcode_hex=self.opcode_hex, mnemonic=self.mnemonic, operands=self.operands, length=2)

# @intent:responsibility オペコードを唯一の正規デコード手順でInstructionに変換します。
# @intent:rationale 00E0/00EE は上位ニブルが SYS と共通なので、ファミリー判定より先に全ワード一致で判定します。
def decode(opcode: int) -> Instruction:
    opcode &= 0xFFFF
    if opcode == CLEAR_SCREEN:
        family = Family.CLS
    elif opcode == SUBROUTINE_RETURN:
        family = Family.RET
    else:
        family = _FAMILY_BY_NIBBLE.get(opcode >> 12, Family.UNSUPPORTED)

    return Instruction(
        family=family,
        opcode=opcode,
        x=(opcode & 0x0F00) >> 8,
        y=(opcode & 0x00F0) >> 4,
        n=opcode & 0x000F,
        kk=opcode & 0x00FF,
        nnn=opcode & 0x0FFF,
    )
