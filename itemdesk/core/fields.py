"""Editable item fields and their validation rules."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from ..i18n import N_, _


@dataclass(frozen=True)
class FieldSpec:
    """Declare one editable field of the item form.

    A non-empty ``required_message`` marks the field as required and is
    the message shown beneath it when the value is blank. Labels and
    messages hold catalogue ids and are translated where they are shown.
    """

    name: str
    label: str
    placeholder: str = ""
    required_message: str = ""
    multiline: bool = False

    @property
    def required(self) -> bool:
        return bool(self.required_message)


ITEM_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec(
        "name",
        label=N_("Name"),
        placeholder=N_("Name"),
        required_message=N_("Please enter a name"),
    ),
    FieldSpec(
        "description",
        label=N_("Description"),
        multiline=True,
    ),
)


def empty_fields(specs: Sequence[FieldSpec] = ITEM_FIELDS) -> dict[str, str]:
    """Return blank values for *specs* in declared order."""
    return {spec.name: "" for spec in specs}


def populate_fields(
    values: Mapping[str, object] | None,
    specs: Sequence[FieldSpec] = ITEM_FIELDS,
) -> dict[str, str]:
    """Return initial form values for *specs* taken from *values*."""
    fields = empty_fields(specs)
    if not values:
        return fields
    for spec in specs:
        value = values.get(spec.name)
        if value is not None:
            fields[spec.name] = str(value)
    return fields


def validate(
    fields: Mapping[str, str],
    specs: Sequence[FieldSpec] = ITEM_FIELDS,
) -> dict[str, str]:
    """Return a mapping of field name to error message for *fields*.

    An empty mapping means the form is valid.
    """
    errors: dict[str, str] = {}
    for spec in specs:
        if not spec.required:
            continue
        value = fields.get(spec.name) or ""
        if not value.strip():
            errors[spec.name] = _(spec.required_message)
    return errors
