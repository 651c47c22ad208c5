import logging
from typing import Optional, Tuple

from chip8_tracer.core.errors import ConfigError
from chip8_tracer.transport.bus import Bus, RAM
from chip8_tracer.display.framebuffer import Framebuffer
from chip8_tracer.arch.chip8.cpu import Chip8Cpu
from chip8_tracer.arch.chip8.state import MEM_SIZE, NUM_REGISTERS
from chip8_tracer.loader.loader import BinaryLoader
from .models import SystemConfig, CpuInitialState

logger = logging.getLogger(__name__)

# @intent:responsibility システム構成（Config）に基づいて、Bus、RAM、Framebuffer、CPUを生成・接続し、初期状態を適用します。
class SystemBuilder:
    # @intent:responsibility programが渡された場合はそのイメージを使い、ファイルは読み直しません。
    def build_system(self, config: SystemConfig, program: Optional[bytes] = None) -> Tuple[Chip8Cpu, Bus, Framebuffer]:
        bus = Bus()
        bus.register_device(0x000, MEM_SIZE - 1, RAM(MEM_SIZE))

        framebuffer = Framebuffer(config.display.width, config.display.height)
        cpu = Chip8Cpu(
            bus,
            framebuffer,
            stack_limit=config.stack_limit,
            edge_policy=config.display.edge_policy,
            timer_divider=config.timing.timer_divider,
        )

        if program is None and config.program:
            program = BinaryLoader().load_file(config.program)
        if program is not None:
            cpu.load_program(program)

        # 初期状態の適用（プログラムロードで状態が作り直された後に行う）
        self.apply_initial_state(cpu, config.initial_state)
        logger.info("Built CHIP-8 system (%dx%d, stack_limit=%s)",
                    framebuffer.width, framebuffer.height, config.stack_limit)
        return cpu, bus, framebuffer

    # @intent:responsibility Configで定義された初期状態をCPUに適用します。
    def apply_initial_state(self, cpu: Chip8Cpu, config_state: CpuInitialState) -> None:
        state = cpu.get_state()
        state.i = self._check_range(config_state.i, 0xFFF, "i")
        state.delay_timer = self._check_range(config_state.delay_timer, 0xFF, "delay_timer")
        for reg_name, value in config_state.registers.items():
            index = self._register_index(reg_name)
            state.v[index] = self._check_range(value, 0xFF, reg_name)

    def _register_index(self, name: str) -> int:
        if len(name) == 2 and name[0] == "v":
            try:
                index = int(name[1], 16)
            except ValueError:
                index = -1
            if 0 <= index < NUM_REGISTERS:
                return index
        raise ConfigError(f"Unknown register '{name}' in initial_state")

    def _check_range(self, value: int, maximum: int, key: str) -> int:
        if not 0 <= value <= maximum:
            raise ConfigError(f"{key} must be within 0..{maximum:#x}, got {value:#x}")
        return value
