from __future__ import annotations

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .rules import DEFAULT_FIELD_DELIMITER, DEFAULT_RECORD_DELIMITER

# A record is one row of fields, in column order. A table is rows in
# encounter order; rows may differ in length.
Record = List[str]
Table = List[Record]


class Status(BaseModel):
    """
    Structural snapshot of a table, produced by get_status().

    Every measurement is optional: None means "not computed / not applicable"
    and is never the same thing as False. num_fields is only set when all
    records have the same number of fields.
    """

    model_config = ConfigDict(frozen=True)

    # At least one record, and all records have the same number of fields.
    is_wellformed: Optional[bool] = None
    all_records_have_equal_num_fields: Optional[bool] = None
    # A field of only whitespace is not blank.
    has_no_blank_fields: Optional[bool] = None
    num_records: Optional[int] = Field(default=None, examples=[2])
    num_fields: Optional[int] = Field(default=None, examples=[None])
    all_fields_numeral: Optional[bool] = None


class TableRequest(BaseModel):
    table: Table = Field(default_factory=list, examples=[[["a", "b"], ["c", "d"]]])


class EncodeRequest(TableRequest):
    field_delimiter: str = Field(default=DEFAULT_FIELD_DELIMITER, min_length=1)
    record_delimiter: str = Field(default=DEFAULT_RECORD_DELIMITER, min_length=1)


class EncodeResponse(BaseModel):
    content: str
    sha256: str


class ParseResponse(BaseModel):
    table: Table
    status: Status
    encoding: str = Field(default="utf-8")


class HealthResponse(BaseModel):
    ok: bool = True
