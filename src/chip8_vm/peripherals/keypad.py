"""
入力協調者（16キーのHexキーパッド）。

実行エンジンはこのインターフェース経由でキー状態を問い合わせます。
ホスト側（UI）がpress/releaseを通知し、エンジン側がis_pressed/take_pressed_keyで参照します。
"""
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Optional, Set

NUM_KEYS = 16

# @intent:responsibility エンジンが必要とするキー入力の問い合わせインターフェースを定義します。
class KeyInput(ABC):
    @abstractmethod
    def is_pressed(self, key: int) -> bool:
        """キーkey(0x0-0xF)が現在押されているかを返します。"""
        pass

    @abstractmethod
    def take_pressed_key(self) -> Optional[int]:
        """
        前回の確認以降に「押された」状態へ遷移したキーを1つ取り出して返します。
        無ければNoneを返します。
        """
        pass

    @abstractmethod
    def clear_transitions(self) -> None:
        """未消費の押下遷移を破棄します。"""
        pass

# @intent:responsibility ホストから通知されたキー状態と押下遷移を保持する標準キーパッド。
class Keypad(KeyInput):
    def __init__(self):
        self._pressed: Set[int] = set()
        # 未消費の押下遷移はキー数分だけ保持し、古いものから捨てる
        self._transitions: Deque[int] = deque(maxlen=NUM_KEYS)

    @staticmethod
    def _check_key(key: int) -> None:
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"Key {key} is outside the CHIP-8 keypad range 0x0-0xF.")

    # @intent:responsibility キー押下を通知します。離された状態からの遷移のみ記録します。
    def press(self, key: int) -> None:
        self._check_key(key)
        if key not in self._pressed:
            self._pressed.add(key)
            self._transitions.append(key)

    def release(self, key: int) -> None:
        self._check_key(key)
        self._pressed.discard(key)

    def release_all(self) -> None:
        self._pressed.clear()

    def is_pressed(self, key: int) -> bool:
        return (key & 0xF) in self._pressed

    def take_pressed_key(self) -> Optional[int]:
        if self._transitions:
            return self._transitions.popleft()
        return None

    def clear_transitions(self) -> None:
        self._transitions.clear()
