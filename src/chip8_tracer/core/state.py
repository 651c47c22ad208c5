# chip8_tracer/core/state.py
"""
Core Layer (CPU状態)

アーキテクチャ非依存の状態基底クラス。抽象CPUとスナップショットはこの型だけを知っています。
"""
from dataclasses import dataclass

# @intent:responsibility 命令サイクルが必ず持つPCを保持します。V0-VFやスタックは arch/ 側の派生クラスが追加します。
@dataclass
class CpuState:
    pc: int = 0x0000
