from dataclasses import dataclass
from typing import Any, Dict, Sequence
import json

from ..constants import DEFAULT_MAX_NESTING_DEPTH
from ..xml_serializer import XmlSerializerOptions


@dataclass
class AppConfig:
    """
    Settings for reading and writing translation files.
    Created by the caller (e.g. from its own config file) and passed to the file factory.
    """
    beautify_output: bool = False
    indent_string: str = "  "
    # prepended/appended to targets copied from the source of new units
    new_trans_unit_target_prefix: str = ""
    new_trans_unit_target_suffix: str = ""
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH

    def serializer_options(self, mixed_content_elements: Sequence[str], beautify=None) -> XmlSerializerOptions:
        return XmlSerializerOptions(
            beautify=self.beautify_output if beautify is None else beautify,
            indent_string=self.indent_string,
            mixed_content_elements=tuple(mixed_content_elements),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "beautify_output": self.beautify_output,
            "indent_string": self.indent_string,
            "new_trans_unit_target_prefix": self.new_trans_unit_target_prefix,
            "new_trans_unit_target_suffix": self.new_trans_unit_target_suffix,
            "max_nesting_depth": self.max_nesting_depth,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        config = cls()
        config.beautify_output = bool(data.get("beautify_output", False))
        config.indent_string = data.get("indent_string", "  ")
        config.new_trans_unit_target_prefix = data.get("new_trans_unit_target_prefix", "")
        config.new_trans_unit_target_suffix = data.get("new_trans_unit_target_suffix", "")
        config.max_nesting_depth = int(data.get("max_nesting_depth", DEFAULT_MAX_NESTING_DEPTH))
        if config.indent_string.strip():
            raise ValueError("indent_string must not contain non white characters")
        return config

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "AppConfig":
        return cls.from_dict(json.loads(text))
