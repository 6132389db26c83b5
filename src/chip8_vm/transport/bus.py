# chip8_vm/transport/bus.py
"""
Transport Layer (メモリバス)

このモジュールは、CHIP-8の4KBアドレス空間を抽象化し、
読み書きアクセスをRAMデバイスに委譲する責務を負います。
範囲外アクセスは丸めずに、致命的なフォールトとして報告します。
"""
from abc import ABC, abstractmethod
from typing import List, Tuple, Iterable
from dataclasses import dataclass
from enum import Enum

from chip8_vm.core.errors import MemoryAccessFault

# @intent:responsibility バスアクセスを記録するためのタイプを定義します。
class BusAccessType(Enum):
    READ = "READ"
    WRITE = "WRITE"

# @intent:responsibility 個々のバスアクセス操作を記録します。
@dataclass(frozen=True) # 不変データ構造
class BusAccess:
    """
    バス上で行われた単一のアクセス（読み込みまたは書き込み）を記録するデータクラス。
    """
    address: int
    data: int # 8bit value
    access_type: BusAccessType

# @intent:responsibility バスの抽象デバイスインターフェースを定義します。
class Device(ABC):
    """
    バスに接続されるデバイスの抽象基底クラス。
    """
    @abstractmethod
    def read(self, address: int) -> int:
        """
        指定されたアドレスから8bitのデータを読み出します。
        アドレスはデバイス内でのオフセットとして扱われます。
        """
        pass

    @abstractmethod
    def write(self, address: int, data: int) -> None:
        """
        指定されたアドレスに8bitのデータを書き込みます。
        """
        pass

# @intent:responsibility CHIP-8のメインメモリとなるRAMデバイスを提供します。
class RAM(Device):
    """
    固定サイズのバイト配列によるRAMデバイス。
    """
    # @intent:pre-condition sizeは正の整数である必要があります。
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size

    # @intent:pre-condition アドレスはRAMの有効範囲内である必要があります。
    def read(self, address: int) -> int:
        if not 0 <= address < self._size:
            raise MemoryAccessFault(f"Address {address:#06x} out of bounds for RAM of size {self._size}.")
        return self._memory[address]

    # @intent:pre-condition アドレスは有効範囲内であり、データは8bit値である必要があります。
    def write(self, address: int, data: int) -> None:
        if not 0 <= address < self._size:
            raise MemoryAccessFault(f"Address {address:#06x} out of bounds for RAM of size {self._size}.")
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    def get_size(self) -> int:
        return self._size

# @intent:responsibility メモリアドレス空間を管理し、デバイスへのアクセスをディスパッチするバス。
# @intent:rationale 全てのアクセスを記録し、Snapshotに含めることで1命令ごとの観測可能性を高めます。
class Bus:
    """
    メモリアドレス空間を管理し、デバイスへのアクセスをディスパッチするバス。
    バス上で行われた全てのメモリアクセスを記録する機能を提供します。
    """
    def __init__(self):
        # メモリマップ: (start_address, end_address, device) のタプルリスト
        self._memory_map: List[Tuple[int, int, Device]] = []
        self._bus_activity_log: List[BusAccess] = []

    def _log_access(self, address: int, data: int, access_type: BusAccessType) -> None:
        self._bus_activity_log.append(BusAccess(address=address, data=data, access_type=access_type))

    # @intent:responsibility 記録されたバスアクティビティログを取得し、クリアします。
    def get_and_clear_activity_log(self) -> List[BusAccess]:
        """
        現在のバスアクティビティログを返し、内部ログをクリアします。
        """
        log = self._bus_activity_log
        self._bus_activity_log = []
        return log

    # @intent:responsibility 指定されたアドレス範囲にデバイスを登録します。
    # @intent:pre-condition start_address <= end_addressかつ非負であり、deviceはDeviceのインスタンスである必要があります。
    def register_device(self, start_address: int, end_address: int, device: Device) -> None:
        """
        指定されたアドレス範囲にデバイスを登録します。
        アドレス範囲の重複チェックは行いません。呼び出し元が責任を持ちます。
        """
        if not (0 <= start_address <= end_address):
            raise ValueError("Invalid address range: start_address must be <= end_address and non-negative.")
        if not isinstance(device, Device):
            raise TypeError("Device must be an instance of a class derived from Device.")

        if isinstance(device, RAM):
            expected_size = end_address - start_address + 1
            if device.get_size() != expected_size:
                raise ValueError(
                    f"Registered {type(device).__name__} device size ({device.get_size()} bytes) does not match "
                    f"the specified address range size ({expected_size} bytes)."
                )

        self._memory_map.append((start_address, end_address, device))

    # @intent:post-condition デバイスが見つからなかった場合、MemoryAccessFaultを発生させます。
    def _find_device(self, address: int) -> Tuple[Device, int]:
        for start, end, device in self._memory_map:
            if start <= address <= end:
                return device, address - start
        raise MemoryAccessFault(f"Address {address:#06x} not mapped to any device.")

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します（ログ記録あり）。
    def read(self, address: int) -> int:
        device, offset = self._find_device(address)
        data = device.read(offset)
        self._log_access(address, data, BusAccessType.READ)
        return data

    # @intent:responsibility ログを記録せずに指定されたアドレスからデータを読み出します。
    def peek(self, address: int) -> int:
        """
        UIやテストなどのインスペクタ用。命令実行の観測結果を汚しません。
        """
        device, offset = self._find_device(address)
        return device.read(offset)

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます（ログ記録あり）。
    def write(self, address: int, data: int) -> None:
        device, offset = self._find_device(address)
        device.write(offset, data)
        self._log_access(address, data, BusAccessType.WRITE)

    # @intent:responsibility ローダー用に、ログを記録せずに連続したバイト列を書き込みます。
    # @intent:rationale プログラムロードは命令実行ではないため、バスアクティビティとして記録しません。
    def load(self, start_address: int, data: Iterable[int]) -> None:
        for i, byte in enumerate(data):
            device, offset = self._find_device(start_address + i)
            device.write(offset, byte)
