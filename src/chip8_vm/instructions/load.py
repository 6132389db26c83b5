"""
インデックスレジスタ、タイマー、メモリ転送命令の実装。
"""
from chip8_vm.common.types import OpKind
from chip8_vm.core.snapshot import Operation
from chip8_vm.core.state import Chip8State
from chip8_vm.peripherals.font import glyph_address
from chip8_vm.transport.bus import Bus
from .base import ExecutionEnvironment, make_operation, reg, addr

ADDRESSABLE_LIMIT = 0xFFF

def _vx(word: int) -> str:
    return reg((word >> 8) & 0xF)

# --- LD I, nnn (Annn) ---
def decode_ld_i(word: int) -> Operation:
    return make_operation(word, OpKind.LD_I, "LD", "I", addr(word & 0xFFF))

def execute_ld_i(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.i = op.nnn

# --- Timers (Fx07 / Fx15 / Fx18) ---
def decode_ld_vx_dt(word: int) -> Operation:
    return make_operation(word, OpKind.LD_VX_DT, "LD", _vx(word), "DT")

def execute_ld_vx_dt(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.v[op.x] = state.delay_timer

def decode_ld_dt_vx(word: int) -> Operation:
    return make_operation(word, OpKind.LD_DT_VX, "LD", "DT", _vx(word))

def execute_ld_dt_vx(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.delay_timer = state.v[op.x]

def decode_ld_st_vx(word: int) -> Operation:
    return make_operation(word, OpKind.LD_ST_VX, "LD", "ST", _vx(word))

def execute_ld_st_vx(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.sound_timer = state.v[op.x]

# --- ADD I, Vx (Fx1E) ---
def decode_add_i(word: int) -> Operation:
    return make_operation(word, OpKind.ADD_I, "ADD", "I", _vx(word))

# @intent:responsibility Iへ16bit加算します。index_overflow_sets_vf が有効な場合のみVFを更新します。
# @intent:rationale Iはアドレス空間(0xFFF)ではなく16bitで保持し、範囲外参照は使用時にフォールトとします。
def execute_add_i(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    total = state.i + state.v[op.x]
    state.i = total & 0xFFFF
    if env.quirks.index_overflow_sets_vf:
        state.vf = 1 if total > ADDRESSABLE_LIMIT else 0

# --- LD F, Vx (Fx29) ---
def decode_ld_f(word: int) -> Operation:
    return make_operation(word, OpKind.LD_F, "LD", "F", _vx(word))

def execute_ld_f(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.i = glyph_address(state.v[op.x])

# --- LD B, Vx (Fx33) ---
def decode_bcd(word: int) -> Operation:
    return make_operation(word, OpKind.BCD, "LD", "B", _vx(word))

# @intent:responsibility Vxを10進3桁に分解し、I, I+1, I+2 へ百・十・一の位を格納します。
def execute_bcd(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    value = state.v[op.x]
    bus.write(state.i, value // 100)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)

# --- LD [I], Vx (Fx55) ---
def decode_store(word: int) -> Operation:
    return make_operation(word, OpKind.STORE, "LD", "[I]", _vx(word))

def execute_store(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    for r in range(op.x + 1):
        bus.write(state.i + r, state.v[r])
    if env.quirks.load_store_increments_i:
        state.i = (state.i + op.x + 1) & 0xFFFF

# --- LD Vx, [I] (Fx65) ---
def decode_load(word: int) -> Operation:
    return make_operation(word, OpKind.LOAD, "LD", _vx(word), "[I]")

def execute_load(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    for r in range(op.x + 1):
        state.v[r] = bus.read(state.i + r)
    if env.quirks.load_store_increments_i:
        state.i = (state.i + op.x + 1) & 0xFFFF
