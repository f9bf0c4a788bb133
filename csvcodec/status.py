from __future__ import annotations

from typing import Optional

from .models import Status, Table
from .rules import is_numeral


def get_status(table: Table) -> Status:
    """
    Walk the table once and report its structural health.

    Never fails. For an empty table everything is vacuously true except
    is_wellformed, which needs at least one record; num_fields is 0 there.
    """
    expected: Optional[int] = None
    equal_num_fields = True
    no_blank_fields = True
    all_numeral = True

    for record in table:
        if expected is None:
            expected = len(record)
        elif len(record) != expected:
            equal_num_fields = False

        for field in record:
            if field == "":
                no_blank_fields = False
                all_numeral = False
            elif all_numeral and not is_numeral(field):
                all_numeral = False

    num_records = len(table)

    num_fields: Optional[int] = None
    if equal_num_fields:
        num_fields = expected if expected is not None else 0

    return Status(
        is_wellformed=equal_num_fields and num_records >= 1,
        all_records_have_equal_num_fields=equal_num_fields,
        has_no_blank_fields=no_blank_fields,
        num_records=num_records,
        num_fields=num_fields,
        all_fields_numeral=all_numeral,
    )
