"""
キー入力命令（スキップ判定、キー入力待ち）の実装。
"""
from chip8_vm.common.types import OpKind
from chip8_vm.core.snapshot import Operation
from chip8_vm.core.state import Chip8State
from chip8_vm.transport.bus import Bus
from .base import ExecutionEnvironment, make_operation, reg, skip_next

# --- SKP Vx (Ex9E) ---
def decode_skp(word: int) -> Operation:
    return make_operation(word, OpKind.SKP, "SKP", reg((word >> 8) & 0xF))

def execute_skp(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    if env.keypad.is_pressed(state.v[op.x] & 0xF):
        skip_next(state)

# --- SKNP Vx (ExA1) ---
def decode_sknp(word: int) -> Operation:
    return make_operation(word, OpKind.SKNP, "SKNP", reg((word >> 8) & 0xF))

def execute_sknp(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    if not env.keypad.is_pressed(state.v[op.x] & 0xF):
        skip_next(state)

# --- LD Vx, K (Fx0A) ---
def decode_ld_vx_k(word: int) -> Operation:
    return make_operation(word, OpKind.LD_VX_K, "LD", reg((word >> 8) & 0xF), "K")

# @intent:responsibility キー入力待ち状態へ遷移します。実際の待機と再開はCPUのstep()が扱います。
# @intent:rationale ブロッキング呼び出しにせず状態フラグで表現し、ホストのフレームループを止めません。
#                  待ち開始以前の押下遷移は破棄し、待ち開始後に押されたキーのみを受け付けます。
def execute_ld_vx_k(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.awaiting_key = True
    state.key_register = op.x
    env.keypad.clear_transitions()
