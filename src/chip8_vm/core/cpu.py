# chip8_vm/core/cpu.py
"""
Core Layer (実行エンジン)

このモジュールは、CHIP-8のフェッチ・デコード・実行サイクルとタイマー減算を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
ペース配分（命令速度と60Hzタイマーの分離）はホスト側のドライバの責務です。
"""
import random
from typing import Dict, List, Optional

from chip8_vm.common.types import RegisterInfo, RegisterLayoutInfo
from chip8_vm.config.models import QuirkConfig
from chip8_vm.core.errors import Chip8Fault, RomTooLargeError
from chip8_vm.core.framebuffer import Framebuffer
from chip8_vm.core.snapshot import Metadata, Operation, Snapshot
from chip8_vm.core.state import Chip8State, MAX_PROGRAM_SIZE, MEMORY_SIZE, NUM_REGISTERS, PROGRAM_START
from chip8_vm.instructions import ExecutionEnvironment, decode_instruction, execute_instruction
from chip8_vm.peripherals.font import FONT_SET, FONT_START
from chip8_vm.peripherals.keypad import KeyInput, Keypad
from chip8_vm.transport.bus import Bus

# @intent:responsibility CHIP-8の命令サイクル、プログラムロード、タイマー減算を提供します。
class Chip8Cpu:
    """
    CHIP-8マシンをエミュレートするクラス。
    ホストはstep()とtick_timers()だけでマシンを駆動します。
    """
    # @intent:pre-condition `bus`には0x000-0xFFFのRAMが登録されている必要があります。
    def __init__(self, bus: Bus, quirks: Optional[QuirkConfig] = None, keypad: Optional[KeyInput] = None,
                 rng: Optional[random.Random] = None, stack_limit: Optional[int] = None):
        self._bus = bus
        self._env = ExecutionEnvironment(
            quirks=quirks if quirks is not None else QuirkConfig(),
            keypad=keypad if keypad is not None else Keypad(),
            rng=rng if rng is not None else random.Random(),
            stack_limit=stack_limit,
        )
        self._state: Chip8State = self._create_initial_state()
        self._cycle_count: int = 0
        self._load_font()

    def _create_initial_state(self) -> Chip8State:
        return Chip8State()

    # @intent:responsibility 組み込みフォントを予約領域へ配置します。
    def _load_font(self) -> None:
        self._bus.load(FONT_START, FONT_SET)

    # @intent:responsibility マシンを生成直後の状態に戻します（メモリはフォントを除きゼロ）。
    def reset(self) -> None:
        self._bus.load(0x000, bytes(MEMORY_SIZE))
        self._load_font()
        self._state = self._create_initial_state()
        self._cycle_count = 0
        self._env.keypad.clear_transitions()
        self._bus.get_and_clear_activity_log()

    # @intent:responsibility プログラムを0x200から逐語的にメモリへコピーします。
    # @intent:pre-condition データ長はプログラム領域(3584バイト)以下である必要があります。
    def load_program(self, data: bytes) -> None:
        data = bytes(data)
        if len(data) > MAX_PROGRAM_SIZE:
            raise RomTooLargeError(
                f"ROM of {len(data)} bytes does not fit in the {MAX_PROGRAM_SIZE} bytes available at {PROGRAM_START:#05x}."
            )
        self._bus.load(PROGRAM_START, data)

    def get_state(self) -> Chip8State:
        return self._state

    @property
    def framebuffer(self) -> Framebuffer:
        return self._state.framebuffer

    @property
    def keypad(self) -> KeyInput:
        return self._env.keypad

    @property
    def quirks(self) -> QuirkConfig:
        return self._env.quirks

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility PCから2バイトをビッグエンディアンで読み出し、PCを2進めます。
    # @intent:pre-condition pc+1 がメモリ範囲内であること。違反はMemoryAccessFault。
    def _fetch(self) -> int:
        pc = self._state.pc
        high = self._bus.read(pc)
        low = self._bus.read(pc + 1)
        self._state.pc = (pc + 2) & 0xFFFF
        return (high << 8) | low

    def _decode(self, word: int) -> Operation:
        return decode_instruction(word, self._env.quirks)

    def _execute(self, operation: Operation) -> None:
        execute_instruction(operation, self._state, self._bus, self._env)

    # @intent:responsibility 1命令サイクルを進め、その結果のスナップショットを返します。
    # @intent:flow ログクリア -> キー入力待ち判定 -> フェッチ(PC+2) -> デコード -> 実行 -> Snapshot生成
    # @intent:post-condition フォールトは発生時のPCと命令語を付与して再送出されます。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点のマシン状態とバスアクティビティを含むSnapshotを返します。
        キー入力待ち中は命令をフェッチせず、待ちの解決のみを試みます。
        """
        self._bus.get_and_clear_activity_log()
        initial_pc = self._state.pc

        wait_snapshot = self._handle_key_wait()
        if wait_snapshot:
            return wait_snapshot

        word: Optional[int] = None
        try:
            word = self._fetch()
            operation = self._decode(word)
            self._execute(operation)
        except Chip8Fault as fault:
            fault.with_context(initial_pc, word)
            raise

        self._cycle_count += operation.cycle_count
        return self._create_snapshot(operation)

    # @intent:responsibility Fx0Aによるキー入力待ちを処理します。
    # @intent:return 待ち状態であればその結果のSnapshot、そうでなければNone。
    # @intent:rationale 押下遷移が無ければPCを進めずに待機を示すSnapshotを返します。
    #                  遷移があればキー値をVxへ格納して待ちを解除し、このstepを消費します。
    def _handle_key_wait(self) -> Optional[Snapshot]:
        state = self._state
        if not state.awaiting_key:
            return None

        operation = decode_instruction(0xF00A | (state.key_register << 8))
        key = self._env.keypad.take_pressed_key()
        if key is None:
            return self._create_snapshot(operation, waiting=True)

        state.v[state.key_register] = key
        state.awaiting_key = False
        self._cycle_count += operation.cycle_count
        return self._create_snapshot(operation)

    def _create_snapshot(self, operation: Operation, waiting: bool = False) -> Snapshot:
        bus_activity = self._bus.get_and_clear_activity_log()

        symbol_info = operation.mnemonic
        if operation.operands:
            symbol_info += " " + ", ".join(operation.operands)

        return Snapshot(
            state=self._state,
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, symbol_info=symbol_info, waiting=waiting),
            bus_activity=bus_activity
        )

    # @intent:responsibility 遅延タイマーとサウンドタイマーを1ずつ減算します（0で飽和）。
    # @intent:pre-condition ホストが命令速度とは独立した一定周期（通常60Hz）で呼び出すこと。
    def tick_timers(self) -> None:
        state = self._state
        if state.delay_timer > 0:
            state.delay_timer -= 1
        if state.sound_timer > 0:
            state.sound_timer -= 1

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        registers = {f"V{index:X}": s.v[index] for index in range(NUM_REGISTERS)}
        registers.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer})
        return registers

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{index:X}", 8) for index in range(NUM_REGISTERS)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]
