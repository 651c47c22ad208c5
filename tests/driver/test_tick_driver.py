# tests/driver/test_tick_driver.py
"""
chip8_tracer.driver.tick_driverモジュールの単体テスト。
"""
import pytest
from unittest.mock import MagicMock

from chip8_tracer.driver.tick_driver import TickDriver
from chip8_tracer.arch.chip8 import Chip8Cpu
from chip8_tracer.core.errors import StackUnderflowError
from chip8_tracer.display.framebuffer import Framebuffer
from chip8_tracer.transport.bus import Bus, RAM

# @intent:test_suite ティックごとの実行と再描画要求、停止とプログラム再ロードを検証します。

def words(*opcodes):
    return b"".join(op.to_bytes(2, "big") for op in opcodes)

@pytest.fixture
def setup():
    bus = Bus()
    bus.register_device(0x000, 0xFFF, RAM(0x1000))
    framebuffer = Framebuffer()
    cpu = Chip8Cpu(bus, framebuffer)
    on_redraw = MagicMock()
    driver = TickDriver(cpu, framebuffer, on_redraw=on_redraw)
    return driver, cpu, framebuffer, on_redraw

# @intent:test_case_tick 1ティックで1命令だけ実行されることを検証します。
def test_tick_executes_one_instruction(setup):
    driver, cpu, _, on_redraw = setup
    cpu.load_program(words(0x6001, 0x6102))
    snapshot = driver.tick()
    assert snapshot.state.pc == 0x202
    assert cpu.get_state().v[1] == 0
    assert driver.tick_count == 1
    on_redraw.assert_not_called()

# @intent:test_case_redraw 画面が変化したティックで再描画が要求され、ダーティフラグが下りることを検証します。
def test_redraw_requested_when_dirty(setup):
    driver, cpu, framebuffer, on_redraw = setup
    cpu.load_program(words(0xD001, 0x1202))
    cpu._bus.load(0x000, 0x80)
    driver.tick()
    on_redraw.assert_called_once()
    frame = on_redraw.call_args[0][0]
    assert frame[0][0] == 1
    assert not framebuffer.dirty
    driver.tick()
    on_redraw.assert_called_once()

def test_run_until_limit(setup):
    driver, cpu, _, _ = setup
    cpu.load_program(words(0x1200))
    assert driver.run(10) == 10
    assert driver.tick_count == 10
    assert not driver.is_running

def test_stop_from_callback(setup):
    driver, cpu, _, on_redraw = setup
    cpu.load_program(words(0x00E0, 0x1200))
    on_redraw.side_effect = lambda frame: driver.stop()
    assert driver.run(100) == 1

def test_run_propagates_errors(setup):
    driver, cpu, _, _ = setup
    cpu.load_program(words(0x00EE))
    with pytest.raises(StackUnderflowError):
        driver.run(5)
    assert not driver.is_running

# @intent:test_case_reload 再ロードでティックが止まり、消去済みの画面が一度描画されることを検証します。
def test_load_program_resets_and_redraws(setup):
    driver, cpu, framebuffer, on_redraw = setup
    cpu.load_program(words(0x1200))
    driver.run(3)
    framebuffer.toggle_pixel(5, 5)
    framebuffer.clear_dirty()

    driver.load_program(words(0x6005))

    assert driver.tick_count == 0
    assert not driver.is_running
    assert cpu.get_state().pc == 0x200
    frame = on_redraw.call_args[0][0]
    assert all(pixel == 0 for row in frame for pixel in row)
    assert not framebuffer.dirty

def test_without_callback_clears_dirty(setup):
    driver, cpu, framebuffer, _ = setup
    driver.set_redraw_callback(None)
    cpu.load_program(words(0x00E0))
    driver.tick()
    assert not framebuffer.dirty
