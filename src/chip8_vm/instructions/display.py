"""
画面命令（クリア、スプライト描画）の実装。
"""
from chip8_vm.common.types import OpKind
from chip8_vm.core.snapshot import Operation
from chip8_vm.core.state import Chip8State
from chip8_vm.transport.bus import Bus
from .base import ExecutionEnvironment, make_operation, reg

# --- CLS (00E0) ---
def decode_cls(word: int) -> Operation:
    return make_operation(word, OpKind.CLS, "CLS")

def execute_cls(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    state.framebuffer.clear()

# --- DRW Vx, Vy, n (Dxyn) ---
def decode_drw(word: int) -> Operation:
    return make_operation(word, OpKind.DRW, "DRW", reg((word >> 8) & 0xF), reg((word >> 4) & 0xF), str(word & 0xF))

# @intent:responsibility Iからnバイトのスプライトを(Vx, Vy)へXOR描画します。
# @intent:post-condition VFは点灯から消灯へ遷移したピクセルが1つでもあれば1、無ければ0。
# @intent:rationale 座標はVF初期化前に読み出すため、x/yにVFを指定した場合も描画前の値を使います。
def execute_drw(state: Chip8State, bus: Bus, op: Operation, env: ExecutionEnvironment) -> None:
    fb = state.framebuffer
    origin_x = state.v[op.x] % fb.width
    origin_y = state.v[op.y] % fb.height
    state.vf = 0

    collision = False
    for row in range(op.n):
        sprite_byte = bus.read(state.i + row)
        if fb.blit_row(origin_x, origin_y + row, sprite_byte):
            collision = True

    state.vf = 1 if collision else 0
