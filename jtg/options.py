"""
Options for the inference core.

Only settings that affect the inferred Shape or the names derived from it
live here. Emitter styling (visibility, derives, import style) belongs to
the emitters.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from jtg.hints import Hint, HintDirectory
from jtg.inference import infer
from jtg.naming import field_name
from jtg.shape import Shape
from jtg.word_case import StringTransform


@dataclass
class Options:
    """Inference options. Construct with defaults and change what you need."""

    hints: List[Tuple[str, Hint]] = field(default_factory=list)
    unwrap: str = ""
    property_name_format: Optional[StringTransform] = None

    def hint_directory(self) -> HintDirectory:
        return HintDirectory(self.hints)

    def infer(self, raw: Union[bytes, str]) -> Shape:
        """Infer a shape from ``raw`` using these options."""
        return infer(raw, self.hint_directory(), unwrap=self.unwrap)

    def field_name(self, key: str, style: str = "camel") -> str:
        """Field identifier for ``key``, honouring property_name_format."""
        return field_name(key, self.property_name_format, style)
