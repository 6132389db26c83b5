import random
from typing import Tuple

from chip8_vm.core.cpu import Chip8Cpu
from chip8_vm.core.state import MEMORY_SIZE
from chip8_vm.peripherals.keypad import Keypad
from chip8_vm.transport.bus import Bus, RAM
from .models import MachineConfig

# @intent:responsibility マシン構成（Config）に基づいて、Bus、RAM、Keypad、CPUを生成・接続します。
class MachineBuilder:
    def build_bus(self) -> Bus:
        bus = Bus()
        bus.register_device(0x000, MEMORY_SIZE - 1, RAM(MEMORY_SIZE))
        return bus

    def build_machine(self, config: MachineConfig) -> Tuple[Chip8Cpu, Bus, Keypad]:
        bus = self.build_bus()
        keypad = Keypad()
        cpu = Chip8Cpu(
            bus,
            quirks=config.quirks,
            keypad=keypad,
            rng=random.Random(config.seed),
            stack_limit=config.stack_limit,
        )
        return cpu, bus, keypad
