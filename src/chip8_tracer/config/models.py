from dataclasses import dataclass, field
from typing import Dict, Optional

from chip8_tracer.display.framebuffer import EdgePolicy, WIDTH, HEIGHT
from chip8_tracer.arch.chip8.state import DEFAULT_STACK_LIMIT, DEFAULT_TIMER_DIVIDER

@dataclass
class DisplayConfig:
    width: int = WIDTH
    height: int = HEIGHT
    edge_policy: EdgePolicy = EdgePolicy.CLIP
    scale: int = 12  # UI上の1画素の表示サイズ(px)

@dataclass
class TimingConfig:
    tick_interval_ms: int = 3
    timer_divider: int = DEFAULT_TIMER_DIVIDER

@dataclass
class CpuInitialState:
    i: int = 0x000
    delay_timer: int = 0
    registers: Dict[str, int] = field(default_factory=dict) # 例: {"v0": 0x0A}

@dataclass
class SystemConfig:
    program: Optional[str] = None
    stack_limit: Optional[int] = DEFAULT_STACK_LIMIT
    display: DisplayConfig = field(default_factory=DisplayConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    initial_state: CpuInitialState = field(default_factory=CpuInitialState)
