"""
SQL helpers shared by the data-access layer.
"""

from typing import Any, List, Mapping, NamedTuple

from jobly.core.errors import BadRequestError


class PartialUpdate(NamedTuple):
    """`SET` clause body and the values bound to its placeholders."""
    set_cols: str
    values: List[Any]


def sql_for_partial_update(data_to_update: Mapping[str, Any], js_to_sql: Mapping[str, str]) -> PartialUpdate:
    """
    Generate the SET clause of a partial UPDATE.

    Example:
        >>> sql_for_partial_update({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
        PartialUpdate(set_cols='"first_name"=$1, "age"=$2', values=['Aliya', 32])

    Args:
        data_to_update: Field name -> new value, in the order to emit
        js_to_sql: Field name -> column name, for fields whose column differs

    Returns:
        PartialUpdate with the `"col"=$n` fragments and the ordered values

    Raises:
        BadRequestError: If data_to_update is empty
    """
    if not data_to_update:
        raise BadRequestError("No data")

    cols = [
        f'"{js_to_sql.get(field, field)}"=${idx}'
        for idx, field in enumerate(data_to_update, start=1)
    ]

    return PartialUpdate(set_cols=", ".join(cols), values=list(data_to_update.values()))
