"""
Helpers for the closed ``IntegerChoices`` enumerations used by the
activity and notification models.
"""
from django.core.exceptions import ValidationError


def coerce_choice(choices_cls, value, field="kind"):
    """
    Resolve ``value`` to a member of ``choices_cls``.

    Accepts a member, its integer code, or its name ("post_created").
    Anything else raises ``ValidationError`` keyed by ``field``.
    """
    if value is None or value == "":
        raise ValidationError({field: "This field is required."})
    if isinstance(value, choices_cls):
        return value
    if isinstance(value, bool):
        raise ValidationError({field: f"{value!r} is not a valid {choices_cls.__name__}."})
    if isinstance(value, int):
        try:
            return choices_cls(value)
        except ValueError:
            pass
    elif isinstance(value, str):
        name = value.strip().upper()
        if name in choices_cls.names:
            return choices_cls[name]
        if value.strip().isdigit():
            return coerce_choice(choices_cls, int(value.strip()), field=field)
    raise ValidationError({field: f"{value!r} is not a valid {choices_cls.__name__}."})
