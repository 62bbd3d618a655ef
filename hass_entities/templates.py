"""Placeholder substitution for prompt templates."""
import json
from typing import Any, Mapping, Optional, Sequence

from hass_entities.errors import MissingArgument
from hass_entities.models import ArgumentSpec


def format_value(value: Any) -> str:
    """Text inserted for an argument value: strings verbatim, anything else as compact JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def render(
    template: str,
    args: Optional[Mapping[str, Any]],
    spec: Sequence[ArgumentSpec],
) -> str:
    """
    Fill the ``{name}`` placeholders of a template

    Args:
        template: Template text containing ``{name}`` placeholders
        args: Supplied argument values, or None when the caller sent none
        spec: Declared arguments of the template

    Returns:
        The template with every supplied argument substituted

    Raises:
        MissingArgument: If a required argument was not supplied

    Arguments are substituted one at a time in sorted key order. A value that
    itself contains another argument's placeholder can therefore be expanded
    by a later substitution. Placeholders without a supplied argument are
    left as they are.
    """
    supplied = args or {}
    for arg in spec:
        if arg.required and arg.name not in supplied:
            raise MissingArgument(arg.name)

    result = template
    for key in sorted(supplied):
        result = result.replace(f"{{{key}}}", format_value(supplied[key]))
    return result
