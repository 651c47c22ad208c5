# tests/arch/chip8/test_chip8_disassembler.py
"""
chip8_tracer.arch.chip8.disassemblerモジュールの単体テスト。
"""
from chip8_tracer.arch.chip8.disassembler import disassemble
from chip8_tracer.transport.bus import Bus, RAM

# @intent:test_suite 逆アセンブル結果の書式と、バスアクティビティを残さないことを検証します。

def make_bus(program):
    bus = Bus()
    bus.register_device(0x000, 0xFFF, RAM(0x1000))
    for offset, byte in enumerate(program):
        bus.load(0x200 + offset, byte)
    return bus

def test_disassemble_listing():
    bus = make_bus(bytes([0x00, 0xE0, 0x60, 0x0A, 0xA0, 0x00, 0xD0, 0x01]))
    assert disassemble(bus, 0x200, 4) == [
        (0x200, "00E0", "CLS"),
        (0x202, "600A", "LD V0, #$0A"),
        (0x204, "A000", "LD I, $000"),
        (0x206, "D001", "DRW V0, V0, 1"),
    ]
    assert bus.get_and_clear_activity_log() == []

def test_disassemble_stops_at_end_of_memory():
    bus = make_bus(b"")
    listing = disassemble(bus, 0xFFC, 8)
    assert [addr for addr, _, _ in listing] == [0xFFC, 0xFFE]
