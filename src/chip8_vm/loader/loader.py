# chip8_vm/loader/loader.py
"""
ROMローダーモジュール。
生バイナリ形式のCHIP-8 ROMをファイル、バイナリストリーム、標準入力から読み込みます。
"""
import sys
from typing import BinaryIO, Optional

from chip8_vm.core.cpu import Chip8Cpu
from chip8_vm.core.errors import RomTooLargeError
from chip8_vm.core.state import MAX_PROGRAM_SIZE

class RomLoader:
    """
    ROMのバイト列を取得し、CPUのプログラム領域(0x200-)へロードするローダー。
    read_* はバイト列の取得とサイズ検証のみ、load_* はCPUへのロードまで行います。
    """
    def read_file(self, file_path: str) -> bytes:
        with open(file_path, 'rb') as f:
            return self.read_stream(f)

    def read_stream(self, stream: BinaryIO) -> bytes:
        data = stream.read()
        if isinstance(data, str):
            raise TypeError("ROM stream must be opened in binary mode.")
        if len(data) > MAX_PROGRAM_SIZE:
            raise RomTooLargeError(f"ROM of {len(data)} bytes exceeds the {MAX_PROGRAM_SIZE} bytes of program space.")
        return bytes(data)

    # @intent:responsibility パイプされた標準入力からROMを読み込みます。
    def read_stdin(self, stdin: Optional[BinaryIO] = None) -> bytes:
        stream = stdin if stdin is not None else sys.stdin.buffer
        return self.read_stream(stream)

    def load_file(self, file_path: str, cpu: Chip8Cpu) -> int:
        data = self.read_file(file_path)
        cpu.load_program(data)
        return len(data)

    def load_stream(self, stream: BinaryIO, cpu: Chip8Cpu) -> int:
        data = self.read_stream(stream)
        cpu.load_program(data)
        return len(data)

    def load_stdin(self, cpu: Chip8Cpu, stdin: Optional[BinaryIO] = None) -> int:
        data = self.read_stdin(stdin)
        cpu.load_program(data)
        return len(data)
