# chip8_vm/runtime/driver.py
"""
ドライバモジュール。

実時間（壁時計）に基づいてマシンを駆動します。命令の実行速度と60Hzのタイマー減算を
それぞれ独立した時間予算で管理し、タイマーの減衰がCPU速度に依存しないようにします。
"""
import time
from typing import Callable, Optional

from chip8_vm.core.cpu import Chip8Cpu
from chip8_vm.core.snapshot import Snapshot

# @intent:responsibility 命令スループットとタイマー周期を分離してCPUを駆動します。
class MachineDriver:
    """
    経過時間から実行すべき命令数とタイマー減算回数を算出し、Chip8Cpuを駆動するクラス。
    UIはフレームごとにadvance()を呼び出し、ヘッドレス実行ではrun()を使用します。
    """
    def __init__(self, cpu: Chip8Cpu, instructions_per_second: int = 700, timer_hz: int = 60,
                 clock: Callable[[], float] = time.perf_counter, max_catch_up: float = 0.25):
        if instructions_per_second <= 0 or timer_hz <= 0:
            raise ValueError("instructions_per_second and timer_hz must be positive.")
        self._cpu = cpu
        self._instructions_per_second = instructions_per_second
        self._timer_hz = timer_hz
        self._clock = clock
        # @intent:rationale 長時間の停止（ウィンドウ移動など）後に大量の命令を一気に実行しないよう、追いつき量を制限します。
        self._max_catch_up = max_catch_up
        self._last_time: Optional[float] = None
        self._instruction_budget: float = 0.0
        self._timer_budget: float = 0.0
        self._running: bool = False
        self._last_snapshot: Optional[Snapshot] = None

    def get_last_snapshot(self) -> Optional[Snapshot]:
        return self._last_snapshot

    @property
    def is_running(self) -> bool:
        return self._running

    # @intent:responsibility 前回呼び出しからの経過時間に応じて命令実行とタイマー減算を行います。
    # @intent:return このフレームで実行したstep()の回数。
    # @intent:post-condition フォールトはそのまま呼び出し元へ伝播します。
    def advance(self, now: Optional[float] = None) -> int:
        now = self._clock() if now is None else now
        if self._last_time is None:
            self._last_time = now
            return 0

        elapsed = min(max(now - self._last_time, 0.0), self._max_catch_up)
        self._last_time = now
        self._instruction_budget += elapsed * self._instructions_per_second
        self._timer_budget += elapsed * self._timer_hz

        executed = 0
        while self._instruction_budget >= 1.0:
            self._instruction_budget -= 1.0
            self._last_snapshot = self._cpu.step()
            executed += 1

        while self._timer_budget >= 1.0:
            self._timer_budget -= 1.0
            self._cpu.tick_timers()

        return executed

    # @intent:responsibility 停止要求があるまでマシンを駆動し続けます（ヘッドレス実行用）。
    def run(self, idle_sleep: float = 0.001) -> None:
        self._running = True
        while self._running:
            self.advance()
            time.sleep(idle_sleep)

    def stop(self) -> None:
        self._running = False
