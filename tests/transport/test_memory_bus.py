# tests/transport/test_memory_bus.py
"""
chip8_vm.transport.busモジュールの単体テスト。
"""
import pytest
from chip8_vm.transport.bus import Bus, RAM, BusAccessType
from chip8_vm.core.errors import MemoryAccessFault, Chip8Fault

# @intent:test_suite メモリバスとRAMデバイスの基本機能と範囲外アクセスの扱いを検証します。

class TestRAM:
    def test_ram_init_valid_size(self):
        ram = RAM(16)
        assert ram.get_size() == 16
        assert all(ram.read(a) == 0 for a in range(16))

    def test_ram_init_invalid_size(self):
        with pytest.raises(ValueError, match="RAM size must be a positive integer."):
            RAM(0)
        with pytest.raises(ValueError):
            RAM(-1)
        with pytest.raises(ValueError):
            RAM(1.5)

    # @intent:test_case_oob 範囲外アクセスはMemoryAccessFault（IndexErrorでもある）となることを検証します。
    def test_ram_out_of_bounds_is_fault(self):
        ram = RAM(4)
        with pytest.raises(MemoryAccessFault):
            ram.read(4)
        with pytest.raises(IndexError):
            ram.write(-1, 0x00)

    def test_ram_write_invalid_data(self):
        ram = RAM(1)
        with pytest.raises(ValueError, match="Data 256 is not an 8-bit value."):
            ram.write(0, 0x100)

class TestBus:
    @pytest.fixture
    def bus(self):
        bus = Bus()
        bus.register_device(0x000, 0xFFF, RAM(0x1000))
        return bus

    def test_read_write_logged(self, bus):
        bus.write(0x300, 0xAB)
        assert bus.read(0x300) == 0xAB
        log = bus.get_and_clear_activity_log()
        assert [a.access_type for a in log] == [BusAccessType.WRITE, BusAccessType.READ]
        assert log[0].address == 0x300 and log[0].data == 0xAB
        assert bus.get_and_clear_activity_log() == []

    def test_peek_and_load_are_not_logged(self, bus):
        bus.load(0x200, b"\x12\x34")
        assert bus.peek(0x200) == 0x12
        assert bus.peek(0x201) == 0x34
        assert bus.get_and_clear_activity_log() == []

    # @intent:test_case_oob アドレス空間(0xFFF)を越えるアクセスは丸められずにフォールトとなることを検証します。
    def test_unmapped_address_faults(self, bus):
        with pytest.raises(MemoryAccessFault):
            bus.read(0x1000)
        with pytest.raises(Chip8Fault):
            bus.write(0x1000, 0x00)
        with pytest.raises(MemoryAccessFault):
            bus.load(0xFFF, b"\x01\x02")

    def test_register_device_invalid_range(self):
        bus = Bus()
        with pytest.raises(ValueError):
            bus.register_device(0x200, 0x100, RAM(0x100))
        with pytest.raises(ValueError):
            bus.register_device(-1, 0x0FF, RAM(0x100))

    def test_register_device_size_mismatch(self):
        bus = Bus()
        with pytest.raises(ValueError):
            bus.register_device(0x000, 0x0FF, RAM(0x200))

    def test_register_non_device(self):
        bus = Bus()
        with pytest.raises(TypeError):
            bus.register_device(0x000, 0x0FF, object())
