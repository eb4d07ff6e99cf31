from __future__ import annotations

from types import MappingProxyType
from typing import List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Table(BaseModel):
    """
    A loaded CSV file: header name -> column position, plus the data rows.

    Rows keep file order and the cells exactly as decoded. Row width is not
    enforced, so a row may be shorter or longer than the header.
    """

    model_config = ConfigDict(frozen=True)

    column_index: Mapping[str, int] = Field(default_factory=dict, validate_default=True)
    rows: Tuple[Tuple[str, ...], ...] = ()

    @field_validator("column_index", mode="after")
    @classmethod
    def read_only_index(cls, value: Mapping[str, int]) -> Mapping[str, int]:
        return MappingProxyType(dict(value))

    def __hash__(self) -> int:
        return hash((tuple(sorted(self.column_index.items())), self.rows))

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def columns(self) -> List[str]:
        return sorted(self.column_index, key=self.column_index.__getitem__)
