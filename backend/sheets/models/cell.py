from dataclasses import dataclass, field
from typing import Dict, Union

FORMULA_PREFIX = "="


@dataclass(frozen=True)
class Literal:
    """Plain text value; its result is the text itself."""
    text: str


@dataclass(frozen=True)
class Formula:
    """Expression following the leading '='."""
    expression: str


CellContent = Union[Literal, Formula]


def parse_content(value: str) -> CellContent:
    """Classify a raw cell value as a literal or a formula."""
    stripped = value.strip()
    if stripped.startswith(FORMULA_PREFIX):
        return Formula(expression=stripped[len(FORMULA_PREFIX):])
    return Literal(text=value)


@dataclass
class Cell:
    value: str
    result: str
    vars: Dict[str, bool] = field(default_factory=dict)     # cell ids this cell reads
    used_in: Dict[str, bool] = field(default_factory=dict)  # cell ids that read this cell

    @property
    def content(self) -> CellContent:
        return parse_content(self.value)

    def to_dict(self) -> dict:
        """Persisted shape; empty link maps are omitted."""
        data = {"value": self.value, "result": self.result}
        if self.vars:
            data["vars"] = dict(self.vars)
        if self.used_in:
            data["used_in"] = dict(self.used_in)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Cell":
        return cls(
            value=str(data["value"]),
            result=str(data.get("result", data["value"])),
            vars={k: True for k in data.get("vars") or {}},
            used_in={k: True for k in data.get("used_in") or {}},
        )
