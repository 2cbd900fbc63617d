from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from tablelink.common.errors import ValidationError


class ColumnOptions(BaseModel):
    """Options record of a column directive.

    Accepts both the camelCase keys of the declarative format (`notNull`,
    `updateDate`, `defaultTo`) and their snake_case field names.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    type: str
    primary: bool = False
    unsigned: bool = False
    unique: bool = False
    not_null: bool = Field(default=False, alias="notNull")
    update_date: bool = Field(default=False, alias="updateDate")
    references: Optional[str] = None
    default_to: Any = Field(default=None, alias="defaultTo")

    @property
    def has_default(self) -> bool:
        """True when a non-None default was supplied; falsy values like 0 still count."""
        return self.default_to is not None


@dataclass(frozen=True)
class ColumnDirective:
    """A parsed column directive.

    Either the shorthand form (a bare type, `shorthand=True`, default options)
    or the full form carrying the caller's options.
    """
    type: str
    options: ColumnOptions
    shorthand: bool = field(default=False)

    @classmethod
    def short(cls, column_type: str) -> "ColumnDirective":
        return cls(type=column_type, options=ColumnOptions(type=column_type), shorthand=True)

    @classmethod
    def full(cls, options: ColumnOptions) -> "ColumnDirective":
        return cls(type=options.type, options=options)


RawDirective = Union[str, Mapping[str, Any], ColumnOptions, ColumnDirective]


def parse_directive(name: str, raw: RawDirective, table: Optional[str] = None) -> ColumnDirective:
    """Resolves a raw directive into its tagged form.

    Args:
        name: Column name, used for error reporting.
        raw: A bare type string, an options mapping, or an already parsed value.
        table: Table name, used for error reporting.

    Returns:
        ColumnDirective: The parsed directive.

    Raises:
        ValidationError: If the directive has neither shape.
    """
    if isinstance(raw, ColumnDirective):
        return raw
    if isinstance(raw, ColumnOptions):
        return ColumnDirective.full(raw)
    if isinstance(raw, str):
        return ColumnDirective.short(raw)
    if isinstance(raw, Mapping):
        try:
            return ColumnDirective.full(ColumnOptions.model_validate(dict(raw)))
        except PydanticValidationError as e:
            raise ValidationError(
                f'Invalid column directive for "{name}": {e}',
                field=f"columns.{name}",
                table=table,
            ) from e
    raise ValidationError(
        f'Column "{name}" must be a type name or an options mapping, not {type(raw).__name__}.',
        field=f"columns.{name}",
        table=table,
    )
