import sys
import yaml
from dataclasses import fields
from typing import Dict, Any, Optional
from .models import MachineConfig, QuirkConfig, DEFAULT_KEY_MAP

_TOP_LEVEL_KEYS = {"quirks", "stack_limit", "seed", "instructions_per_second", "timer_hz", "scale", "key_map"}

# @intent:responsibility YAML形式のマシン構成ファイルを読み込み、MachineConfigへ変換します。
class ConfigLoader:
    def load_from_file(self, path: str) -> MachineConfig:
        with open(path, 'r') as f:
            return self.load_from_string(f.read())

    def load_from_string(self, text: str) -> MachineConfig:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid machine config YAML: {e}") from e
        return self.parse_config(data or {})

    def parse_config(self, data: Dict[str, Any]) -> MachineConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Machine config must be a mapping, got {type(data).__name__}.")

        for key in data:
            if key not in _TOP_LEVEL_KEYS:
                print(f"Warning: Unknown config key '{key}' ignored", file=sys.stderr)

        quirks = self._parse_quirks(data.get("quirks", {}) or {})

        # Parse Key Map
        key_map = dict(DEFAULT_KEY_MAP)
        for host_key, chip8_key in (data.get("key_map", {}) or {}).items():
            value = self._parse_int(chip8_key)
            if not 0 <= value <= 0xF:
                raise ValueError(f"Key map entry '{host_key}' must map to 0x0-0xF, got {chip8_key}")
            key_map[str(host_key).upper()] = value

        config = MachineConfig(
            quirks=quirks,
            stack_limit=self._parse_optional_int(data.get("stack_limit")),
            seed=self._parse_optional_int(data.get("seed")),
            instructions_per_second=self._parse_int(data.get("instructions_per_second", 700)),
            timer_hz=self._parse_int(data.get("timer_hz", 60)),
            scale=self._parse_int(data.get("scale", 12)),
            key_map=key_map,
        )
        self._validate(config)
        return config

    def _parse_quirks(self, quirk_data: Dict[str, Any]) -> QuirkConfig:
        known = {f.name for f in fields(QuirkConfig)}
        values = {}
        for name, value in quirk_data.items():
            if name not in known:
                print(f"Warning: Unknown quirk '{name}' ignored", file=sys.stderr)
                continue
            if not isinstance(value, bool):
                raise ValueError(f"Quirk '{name}' must be a boolean, got {value!r}")
            values[name] = value
        return QuirkConfig(**values)

    def _validate(self, config: MachineConfig) -> None:
        if config.stack_limit is not None and config.stack_limit <= 0:
            raise ValueError(f"stack_limit must be positive, got {config.stack_limit}")
        if config.instructions_per_second <= 0:
            raise ValueError(f"instructions_per_second must be positive, got {config.instructions_per_second}")
        if config.timer_hz <= 0:
            raise ValueError(f"timer_hz must be positive, got {config.timer_hz}")
        if config.scale <= 0:
            raise ValueError(f"scale must be positive, got {config.scale}")

    def _parse_optional_int(self, value: Any) -> Optional[int]:
        if value is None:
            return None
        return self._parse_int(value)

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
