"""
Search Request DTOs

Search criteria arrive as repeated `search` query values of the form
`field:OPERATOR:value`, e.g. `name:STARTS_WITH:Re` or `owner:EMPTY`.
Operators are case-insensitive; the value may itself contain ':'.
"""

from typing import List, Optional, Sequence

from pydantic import BaseModel, Field, model_validator

from stackhelper.constants import SearchOperator, Paging
from stackhelper.exceptions import InvalidQueryError


class SearchCriterion(BaseModel):
    """One field comparison."""

    field: str = Field(min_length=1, description="Mapped field name")
    operator: SearchOperator = Field(SearchOperator.EQUALS, description="Comparison operator")
    value: Optional[str] = Field(None, description="Operand, omitted for EMPTY")

    @model_validator(mode="after")
    def check_value(self):
        if SearchOperator.requires_value(self.operator) and self.value is None:
            raise ValueError(f"Operator {self.operator.value} requires a value")
        return self

    @classmethod
    def parse(cls, raw: str) -> "SearchCriterion":
        """
        Parse a single `field:OPERATOR[:value]` expression.

        Raises:
            InvalidQueryError: If the expression is malformed or the operator unknown
        """
        parts = raw.split(Paging.CRITERION_SEPARATOR, 2)
        if len(parts) < 2 or not parts[0].strip():
            raise InvalidQueryError(
                f"Malformed search criterion '{raw}', expected field:OPERATOR:value",
                parameter=Paging.SEARCH_PARAM
            )
        field = parts[0].strip()
        try:
            operator = SearchOperator(parts[1].strip().upper())
        except ValueError:
            raise InvalidQueryError(
                f"Unknown search operator '{parts[1]}' in '{raw}'",
                parameter=Paging.SEARCH_PARAM
            )
        value = parts[2] if len(parts) == 3 else None
        if SearchOperator.requires_value(operator) and value is None:
            raise InvalidQueryError(
                f"Operator {operator.value} on '{field}' requires a value",
                parameter=Paging.SEARCH_PARAM
            )
        return cls(field=field, operator=operator, value=value)

    @classmethod
    def parse_all(cls, raw_values: Optional[Sequence[str]]) -> List["SearchCriterion"]:
        return [cls.parse(raw) for raw in (raw_values or []) if raw and raw.strip()]
