"""
chip8_vm.config（ConfigLoader, MachineBuilder）の単体テスト。
"""
import pytest

from chip8_vm.config.builder import MachineBuilder
from chip8_vm.config.loader import ConfigLoader
from chip8_vm.config.models import DEFAULT_KEY_MAP, MachineConfig, QuirkConfig
from chip8_vm.core.cpu import Chip8Cpu
from chip8_vm.core.errors import StackOverflowFault
from chip8_vm.peripherals.keypad import Keypad

YAML_CONFIG = """
quirks:
  shift_uses_vy: true
  load_store_increments_i: true
stack_limit: 16
seed: "0x2A"
instructions_per_second: 1000
timer_hz: 60
scale: 8
key_map:
  x: 0x0
  m: 0xF
"""

@pytest.fixture
def loader():
    return ConfigLoader()

class TestConfigLoader:
    def test_defaults_from_empty_document(self, loader):
        config = loader.load_from_string("")
        assert config == MachineConfig()
        assert config.quirks == QuirkConfig()
        assert config.stack_limit is None
        assert config.instructions_per_second == 700

    def test_load_from_file(self, loader, tmp_path):
        path = tmp_path / "machine.yaml"
        path.write_text(YAML_CONFIG)
        config = loader.load_from_file(str(path))

        assert config.quirks.shift_uses_vy is True
        assert config.quirks.load_store_increments_i is True
        assert config.quirks.vf_set_on_no_borrow is True
        assert config.stack_limit == 16
        assert config.seed == 0x2A
        assert config.instructions_per_second == 1000
        assert config.scale == 8
        assert config.key_map["M"] == 0xF
        assert config.key_map["X"] == 0x0
        # 指定の無いキーは既定の割り当てを保持する
        assert config.key_map["Q"] == DEFAULT_KEY_MAP["Q"]

    # @intent:test_case_warning 未知のキーとクワークは警告を出力して無視されることを検証します。
    def test_unknown_keys_warn(self, loader, capsys):
        config = loader.parse_config({"turbo": True, "quirks": {"warp_drive": True}})
        err = capsys.readouterr().err
        assert "Warning: Unknown config key 'turbo' ignored" in err
        assert "Warning: Unknown quirk 'warp_drive' ignored" in err
        assert config.quirks == QuirkConfig()

    @pytest.mark.parametrize("data", [
        {"quirks": {"shift_uses_vy": "yes"}},
        {"stack_limit": 0},
        {"instructions_per_second": -5},
        {"timer_hz": 0},
        {"scale": 0},
        {"seed": True},
        {"seed": 1.5},
        {"key_map": {"k": 16}},
    ])
    def test_invalid_values(self, loader, data):
        with pytest.raises(ValueError):
            loader.parse_config(data)

    def test_non_mapping_document(self, loader):
        with pytest.raises(ValueError):
            loader.load_from_string("- just\n- a list\n")

    def test_malformed_yaml_is_value_error(self, loader):
        with pytest.raises(ValueError, match="Invalid machine config YAML"):
            loader.load_from_string("quirks: [unclosed")

class TestMachineBuilder:
    def test_build_machine_wires_components(self):
        config = MachineConfig(quirks=QuirkConfig(shift_uses_vy=True), stack_limit=1)
        cpu, bus, keypad = MachineBuilder().build_machine(config)
        assert isinstance(cpu, Chip8Cpu)
        assert isinstance(keypad, Keypad)
        assert cpu.keypad is keypad
        assert cpu.quirks.shift_uses_vy is True
        assert bus.peek(0xFFF) == 0

        cpu.load_program(b"\x22\x00")
        cpu.step()
        with pytest.raises(StackOverflowFault):
            cpu.step()

    # @intent:test_case_seed 同じシードで構築したマシンはCxkkの結果が一致することを検証します。
    def test_seed_makes_random_reproducible(self):
        program = b"".join(bytes([0xC0 | r, 0xFF]) for r in range(8))
        results = []
        for _ in range(2):
            cpu, _, _ = MachineBuilder().build_machine(MachineConfig(seed=99))
            cpu.load_program(program)
            for _ in range(8):
                cpu.step()
            results.append(list(cpu.get_state().v[:8]))
        assert results[0] == results[1]
