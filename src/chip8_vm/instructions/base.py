# src/chip8_vm/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
"""
import random
from dataclasses import dataclass, field
from typing import Optional

from chip8_vm.common.types import OpKind
from chip8_vm.config.models import QuirkConfig
from chip8_vm.core.errors import StackOverflowFault, StackUnderflowFault
from chip8_vm.core.snapshot import Operation
from chip8_vm.core.state import Chip8State
from chip8_vm.peripherals.keypad import KeyInput, Keypad

# @intent:data_structure 命令実行時に参照する外部要素（クワーク設定、入力協調者、乱数源）をまとめます。
@dataclass
class ExecutionEnvironment:
    quirks: QuirkConfig = field(default_factory=QuirkConfig)
    keypad: KeyInput = field(default_factory=Keypad)
    rng: random.Random = field(default_factory=random.Random)
    stack_limit: Optional[int] = None

# --- オペランド表記 ---
def reg(index: int) -> str:
    return f"V{index:X}"

def imm(value: int) -> str:
    return f"0x{value:02X}"

def addr(value: int) -> str:
    return f"0x{value:03X}"

# @intent:utility_function 命令語・種別・ニーモニックからOperationを生成します。
def make_operation(word: int, kind: OpKind, mnemonic: str, *operands: str) -> Operation:
    return Operation(word=word, kind=kind, mnemonic=mnemonic, operands=list(operands))

# @intent:utility_function 次の命令を読み飛ばします（PCは既に次命令を指している）。
def skip_next(state: Chip8State) -> None:
    state.pc = (state.pc + 2) & 0xFFFF

# @intent:utility_function 戻りアドレスをコールスタックへ積みます。
# @intent:pre-condition スタック上限が設定されている場合、上限を超えるとStackOverflowFault。
def push_return(state: Chip8State, env: ExecutionEnvironment, return_addr: int) -> None:
    if env.stack_limit is not None and len(state.stack) >= env.stack_limit:
        raise StackOverflowFault(f"Call stack exceeded limit of {env.stack_limit} entries.")
    state.stack.append(return_addr & 0xFFFF)

# @intent:utility_function コールスタックから戻りアドレスを取り出します。
def pop_return(state: Chip8State) -> int:
    if not state.stack:
        raise StackUnderflowFault("Tried to return with an empty call stack.")
    return state.stack.pop()
