"""
Field Specifications

Generic single-column specifications driven by a SearchOperator, plus the
helper that turns a list of search criteria into one AND-ed specification
for a model.
"""

import re
from datetime import date, datetime
from typing import Any, Iterable, Optional

from stackhelper.constants import SearchOperator, Paging
from stackhelper.exceptions import InvalidQueryError
from .paging import mapped_columns
from .specifications import Specification


def _coerce(column, field: str, value: Any) -> Any:
    """Convert a raw (usually string) operand to the column's Python type."""
    if value is None or not isinstance(value, str):
        return value
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value
    try:
        if python_type is bool:
            lowered = value.strip().lower()
            if lowered not in ('true', 'false', '1', '0', 'yes', 'no'):
                raise ValueError(value)
            return lowered in ('true', '1', 'yes')
        if python_type is datetime:
            return datetime.fromisoformat(value)
        if python_type is date:
            return date.fromisoformat(value)
        if python_type in (int, float):
            return python_type(value)
    except ValueError:
        raise InvalidQueryError(
            f"Value {value!r} is not a valid {python_type.__name__} for field '{field}'",
            parameter=Paging.SEARCH_PARAM
        )
    return value


class FieldSpecification(Specification[Any]):
    """Specification comparing one mapped column against an operand."""

    TEXT_OPERATORS = (
        SearchOperator.LIKE,
        SearchOperator.STARTS_WITH,
        SearchOperator.ENDS_WITH,
        SearchOperator.CONTAINS,
    )

    def __init__(self, model, field: str, operator: SearchOperator, value: Any = None):
        """
        Initialize specification.

        Args:
            model: SQLAlchemy model class
            field: Mapped column attribute name
            operator: Comparison operator
            value: Operand (ignored for EMPTY)

        Raises:
            InvalidQueryError: If the field is unknown or the operand is
                missing or of the wrong type
        """
        columns = mapped_columns(model)
        if field not in columns:
            raise InvalidQueryError(
                f"Cannot search {model.__name__} by unknown field '{field}'",
                parameter=Paging.SEARCH_PARAM
            )
        if SearchOperator.requires_value(operator) and value is None:
            raise InvalidQueryError(
                f"Operator {operator.value} on '{field}' requires a value",
                parameter=Paging.SEARCH_PARAM
            )

        self.model = model
        self.field = field
        self.operator = operator
        self.column = columns[field]
        if operator in self.TEXT_OPERATORS:
            self.value = None if value is None else str(value)
        else:
            self.value = _coerce(self.column, field, value)

    def is_satisfied_by(self, candidate: Any) -> bool:
        actual = getattr(candidate, self.field)
        op = self.operator
        if op is SearchOperator.EMPTY:
            return actual is None
        if actual is None:
            return False
        if op is SearchOperator.EQUALS:
            return actual == self.value
        if op is SearchOperator.NOT_EQUALS:
            return actual != self.value
        if op is SearchOperator.GREATER_THAN:
            return actual > self.value
        if op is SearchOperator.LESS_THAN:
            return actual < self.value

        text = str(actual)
        if op is SearchOperator.STARTS_WITH:
            return text.startswith(self.value)
        if op is SearchOperator.ENDS_WITH:
            return text.endswith(self.value)
        if op is SearchOperator.CONTAINS:
            return self.value in text
        # LIKE: convert SQL pattern to regex
        regex_pattern = ''.join(
            '.*' if ch == '%' else '.' if ch == '_' else re.escape(ch)
            for ch in self.value
        )
        return re.fullmatch(regex_pattern, text, re.DOTALL) is not None

    def to_sql_filter(self):
        column = self.column
        op = self.operator
        if op is SearchOperator.EMPTY:
            return column.is_(None)
        if op is SearchOperator.EQUALS:
            return column == self.value
        if op is SearchOperator.NOT_EQUALS:
            return column != self.value
        if op is SearchOperator.GREATER_THAN:
            return column > self.value
        if op is SearchOperator.LESS_THAN:
            return column < self.value
        if op is SearchOperator.STARTS_WITH:
            return column.startswith(self.value, autoescape=True)
        if op is SearchOperator.ENDS_WITH:
            return column.endswith(self.value, autoescape=True)
        if op is SearchOperator.CONTAINS:
            return column.contains(self.value, autoescape=True)
        return column.like(self.value)

    def __repr__(self):
        return f"FieldSpecification({self.field} {self.operator.value} {self.value!r})"


def build_specification(model, criteria: Optional[Iterable]) -> Optional[Specification]:
    """
    AND together search criteria for a model.

    Args:
        model: SQLAlchemy model class
        criteria: Objects exposing field, operator and value attributes

    Returns:
        Combined specification, or None when there are no criteria
    """
    specs = [
        FieldSpecification(model, criterion.field, criterion.operator, criterion.value)
        for criterion in (criteria or [])
    ]
    if not specs:
        return None
    return Specification.all_of(specs)
