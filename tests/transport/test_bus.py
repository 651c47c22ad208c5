# tests/transport/test_bus.py
"""
chip8_tracer.transport.busモジュールの単体テスト。
"""
import pytest
from chip8_tracer.transport.bus import Bus, Device, RAM, BusAccessType
from chip8_tracer.core.errors import MemoryRangeError

# @intent:test_suite 共通バスとデバイスの基本的な機能とエラーハンドリングを検証します。

class TestRAM:
    """
    RAMデバイスの単体テスト。
    """
    # @intent:test_case_init RAMクラスが正しいサイズで初期化されることを検証します。
    def test_ram_init_valid_size(self):
        ram = RAM(16)
        assert ram.get_size() == 16
        assert all(ram.read(i) == 0 for i in range(16))

    # @intent:test_case_init 無効なサイズでRAMを初期化するとValueErrorが発生することを検証します。
    def test_ram_init_invalid_size(self):
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(0)
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(1.5)

    # @intent:test_case_oob 境界外アドレスへのアクセスがMemoryRangeError（IndexError互換）になることを検証します。
    def test_ram_read_write_out_of_bounds(self):
        ram = RAM(4)
        with pytest.raises(MemoryRangeError, match="Address 4 out of bounds for RAM of size 4."):
            ram.read(4)
        with pytest.raises(IndexError):
            ram.write(-1, 0x00)

    # @intent:test_case_data 8bitを超えるデータの書き込みはValueErrorになることを検証します。
    def test_ram_write_invalid_data(self):
        ram = RAM(1)
        with pytest.raises(ValueError, match="Data 256 is not an 8-bit value."):
            ram.write(0, 0x100)

    # @intent:test_case_reset resetで全セルが0に戻ることを検証します。
    def test_ram_reset(self):
        ram = RAM(4)
        ram.write(2, 0xAB)
        ram.reset()
        assert ram.read(2) == 0

class TestBus:
    """
    Busの単体テスト。
    """
    @pytest.fixture
    def bus(self):
        bus = Bus()
        bus.register_device(0x000, 0xFFF, RAM(0x1000))
        return bus

    # @intent:test_case_register サイズとアドレス範囲が一致しないRAMの登録を拒否することを検証します。
    def test_register_size_mismatch(self):
        bus = Bus()
        with pytest.raises(ValueError, match="does not match"):
            bus.register_device(0x000, 0x0FF, RAM(0x1000))

    def test_register_invalid_range_and_type(self):
        bus = Bus()
        with pytest.raises(ValueError):
            bus.register_device(0x100, 0x0FF, RAM(1))
        with pytest.raises(TypeError):
            bus.register_device(0x000, 0x0FF, object())

    # @intent:test_case_log 読み込みだけがアクセスログに記録され、取得時にクリアされることを検証します。
    def test_read_logging(self, bus):
        bus.load(0x200, 0x12)
        assert bus.read(0x200) == 0x12
        log = bus.get_and_clear_activity_log()
        assert [(a.address, a.data, a.access_type) for a in log] == [
            (0x200, 0x12, BusAccessType.READ),
        ]
        assert bus.get_and_clear_activity_log() == []

    # @intent:test_case_peek_load peekとloadはログに残らないことを検証します。
    def test_peek_and_load_are_not_logged(self, bus):
        bus.load(0x300, 0x77)
        assert bus.peek(0x300) == 0x77
        assert bus.get_and_clear_activity_log() == []

    # @intent:test_case_unmapped マップ外アドレスへのアクセスがMemoryRangeErrorになることを検証します。
    def test_unmapped_address(self, bus):
        with pytest.raises(MemoryRangeError, match="not mapped"):
            bus.read(0x1000)

    # @intent:test_case_reset Bus.resetが全デバイスをリセットしログを破棄することを検証します。
    def test_reset_devices(self, bus):
        bus.load(0x400, 0x55)
        bus.reset()
        assert bus.peek(0x400) == 0
        assert bus.get_and_clear_activity_log() == []

    # @intent:test_case_device_default 状態を持たないデバイスのresetは何もしないことを検証します。
    def test_custom_device_default_reset(self):
        class ConstantDevice(Device):
            def read(self, address):
                return 0x42

            def write(self, address, data):
                pass

        bus = Bus()
        bus.register_device(0x000, 0x00F, ConstantDevice())
        bus.reset()
        assert bus.read(0x005) == 0x42

    # @intent:test_case_write_port メモリへの書き込み口はログを残さないloadだけであることを検証します。
    def test_only_unlogged_write_port(self, bus):
        assert not hasattr(bus, "write")
        assert [t.name for t in BusAccessType] == ["READ"]
