import logging
import os
from typing import Dict, Any, Optional

import yaml

from chip8_tracer.core.errors import ConfigError
from chip8_tracer.display.framebuffer import EdgePolicy
from .models import SystemConfig, DisplayConfig, TimingConfig, CpuInitialState

logger = logging.getLogger(__name__)

KNOWN_KEYS = {"program", "stack_limit", "display", "timing", "initial_state"}

class ConfigLoader:
    def load_from_file(self, path: str) -> SystemConfig:
        with open(path, "r") as f:
            config = self._parse_config(self._safe_load(f))
        # 相対パスのプログラムは設定ファイルの位置を基準に解決する
        if config.program and not os.path.isabs(config.program):
            config.program = os.path.join(os.path.dirname(os.path.abspath(path)), config.program)
        return config

    def load_from_string(self, text: str) -> SystemConfig:
        return self._parse_config(self._safe_load(text))

    def _safe_load(self, stream) -> Any:
        try:
            return yaml.safe_load(stream) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Malformed YAML: {e}") from e

    def _parse_config(self, data: Dict[str, Any]) -> SystemConfig:
        if not isinstance(data, dict):
            raise ConfigError("Top level of a system config must be a mapping.")
        for key in sorted(set(data) - KNOWN_KEYS, key=str):
            logger.warning("Ignoring unknown config key '%s'", key)

        config = SystemConfig(program=data.get("program"))
        if "stack_limit" in data:
            config.stack_limit = self._parse_optional_positive(data["stack_limit"], "stack_limit")

        # Parse Display
        display_data = data.get("display") or {}
        config.display = DisplayConfig(
            width=self._parse_positive(display_data.get("width", config.display.width), "display.width"),
            height=self._parse_positive(display_data.get("height", config.display.height), "display.height"),
            edge_policy=self._parse_edge_policy(display_data.get("edge_policy", config.display.edge_policy.value)),
            scale=self._parse_positive(display_data.get("scale", config.display.scale), "display.scale"),
        )

        # Parse Timing
        timing_data = data.get("timing") or {}
        config.timing = TimingConfig(
            tick_interval_ms=self._parse_positive(
                timing_data.get("tick_interval_ms", config.timing.tick_interval_ms), "timing.tick_interval_ms"),
            timer_divider=self._parse_positive(
                timing_data.get("timer_divider", config.timing.timer_divider), "timing.timer_divider"),
        )

        # Parse Initial State
        initial_state_data = data.get("initial_state") or {}
        registers = {}
        for name, value in (initial_state_data.get("registers") or {}).items():
            registers[str(name).lower()] = self._parse_int(value)
        config.initial_state = CpuInitialState(
            i=self._parse_int(initial_state_data.get("i", 0)),
            delay_timer=self._parse_int(initial_state_data.get("delay_timer", 0)),
            registers=registers,
        )
        return config

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                if value.lower().startswith("0x"):
                    return int(value, 16)
                return int(value)
            except ValueError:
                raise ConfigError(f"Invalid integer format: {value}")
        raise ConfigError(f"Invalid integer format: {value}")

    def _parse_positive(self, value: Any, key: str) -> int:
        parsed = self._parse_int(value)
        if parsed <= 0:
            raise ConfigError(f"{key} must be positive, got {parsed}")
        return parsed

    def _parse_optional_positive(self, value: Any, key: str) -> Optional[int]:
        if value is None:
            return None
        return self._parse_positive(value, key)

    def _parse_edge_policy(self, value: Any) -> EdgePolicy:
        try:
            return EdgePolicy(str(value).lower())
        except ValueError:
            raise ConfigError(f"Unknown edge_policy '{value}' (expected 'clip' or 'wrap')")
