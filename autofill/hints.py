"""
Hint builder.

A hint is the lowercase signature of a field:

    tag + type + name + id + placeholder + label text

It is the only signal the generic rules classify on. Label association can
differ per element, so hints are rebuilt for every field on every pass.
"""

from dataclasses import dataclass, field
from typing import Tuple

from .dom import Element, Option


@dataclass(frozen=True)
class FieldView:
    """Immutable snapshot of a field, taken right before it is evaluated."""

    element: Element = field(compare=False, repr=False)
    tag: str = ""
    input_type: str = ""
    name: str = ""
    element_id: str = ""
    placeholder: str = ""
    label_text: str = ""
    value: str = ""
    checked: bool = False
    options: Tuple[Option, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.value

    @property
    def hint(self) -> str:
        return build_hint(self)


def describe_field(element: Element) -> FieldView:
    """Read everything the rules need from a live element, once."""
    tag = element.tag
    return FieldView(
        element=element,
        tag=tag,
        input_type=element.input_type or "",
        name=element.get_attribute("name") or "",
        element_id=element.get_attribute("id") or "",
        placeholder=element.get_attribute("placeholder") or "",
        label_text=element.label_text() or "",
        value=element.value or "",
        checked=element.checked,
        options=tuple(element.options()) if tag == "select" else (),
    )


def build_hint(view: FieldView) -> str:
    parts = [
        view.tag,
        view.input_type,
        view.name,
        view.element_id,
        view.placeholder,
        view.label_text,
    ]
    return " ".join(part.lower() for part in parts).strip()


def hint_for(element: Element) -> str:
    return build_hint(describe_field(element))
