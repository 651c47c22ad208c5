"""
UI層とアーキテクチャ層が共有する表示用の型。
"""
from typing import List, NamedTuple

# @intent:data_structure 1本のレジスタの名前とビット幅。レジスタビューはこれを見てラベルを生成します。
class RegisterInfo(NamedTuple):
    name: str
    width: int  # 8 (V0-VF, SP, DT) / 12 (I, PC)

    @property
    def hex_digits(self) -> int:
        return (self.width + 3) // 4

# @intent:data_structure 表示上ひとまとめにするレジスタの組（例: "General", "Timers"）。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
