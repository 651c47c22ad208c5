# tests/config/test_config_loader.py
"""
chip8_tracer.config.loaderモジュールの単体テスト。
"""
import logging
import os
import pytest

from chip8_tracer.config.loader import ConfigLoader
from chip8_tracer.config.models import SystemConfig
from chip8_tracer.core.errors import ConfigError
from chip8_tracer.display.framebuffer import EdgePolicy

# @intent:test_suite YAMLのシステム構成ファイルの解析と検証を行います。

class TestConfigLoader:
    @pytest.fixture
    def loader(self):
        return ConfigLoader()

    def test_empty_document_uses_defaults(self, loader):
        config = loader.load_from_string("")
        assert config == SystemConfig()
        assert config.stack_limit == 16
        assert config.display.edge_policy == EdgePolicy.CLIP
        assert config.timing.tick_interval_ms == 3
        assert config.timing.timer_divider == 16

    def test_full_document(self, loader):
        config = loader.load_from_string("""
program: /roms/pong.ch8
stack_limit: 24
display:
  width: 64
  height: 32
  edge_policy: wrap
  scale: 8
timing:
  tick_interval_ms: 2
  timer_divider: 17
initial_state:
  i: 0x300
  delay_timer: 60
  registers:
    V0: 0x0A
    vf: 1
""")
        assert config.program == "/roms/pong.ch8"
        assert config.stack_limit == 24
        assert config.display.edge_policy == EdgePolicy.WRAP
        assert config.display.scale == 8
        assert config.timing.tick_interval_ms == 2
        assert config.timing.timer_divider == 17
        assert config.initial_state.i == 0x300
        assert config.initial_state.delay_timer == 60
        assert config.initial_state.registers == {"v0": 0x0A, "vf": 1}

    def test_hex_string_values(self, loader):
        config = loader.load_from_string('initial_state: {i: "0x2A0", registers: {v1: "0xFF"}}')
        assert config.initial_state.i == 0x2A0
        assert config.initial_state.registers == {"v1": 0xFF}

    def test_null_sections_and_unlimited_stack(self, loader):
        config = loader.load_from_string("stack_limit: null\ndisplay:\ntiming:\n")
        assert config.stack_limit is None
        assert config.display.width == 64

    @pytest.mark.parametrize("text", [
        "stack_limit: 0",
        "display: {edge_policy: bounce}",
        "timing: {timer_divider: -1}",
        "initial_state: {i: yes}",
        "initial_state: {i: '0xZZ'}",
        "display: {width: [1, 2]}",
        "- just\n- a list\n",
        "program: [unclosed",
    ])
    def test_invalid_documents(self, loader, text):
        with pytest.raises(ConfigError):
            loader.load_from_string(text)

    # @intent:test_case_unknown_key 未知のキーは警告を記録して無視されることを検証します。
    def test_unknown_key_warns(self, loader, caplog):
        with caplog.at_level(logging.WARNING, logger="chip8_tracer.config.loader"):
            config = loader.load_from_string("speed: fast\n")
        assert config == SystemConfig()
        assert "speed" in caplog.text

    # @intent:test_case_relative_program 相対パスのプログラムが設定ファイルの位置で解決されることを検証します。
    def test_load_from_file_resolves_program(self, loader, tmp_path):
        config_file = tmp_path / "system.yaml"
        config_file.write_text("program: roms/demo.ch8\n")
        config = loader.load_from_file(str(config_file))
        assert config.program == os.path.join(str(tmp_path), "roms/demo.ch8")
