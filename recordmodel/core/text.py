"""String helpers for mapping input keys onto model attributes."""

from __future__ import annotations


def underscore_to_camel_case(value: str, capitalize_first: bool = True) -> str:
    """Convert ``underscore_form`` to ``CamelCase``.

    Only the first letter of each segment is upper-cased; the rest of the
    segment is kept as given, so ``"user_ID"`` becomes ``"UserID"``.

    >>> underscore_to_camel_case("first_name")
    'FirstName'
    >>> underscore_to_camel_case("first_name", capitalize_first=False)
    'firstName'
    """
    words = value.replace("_", " ").split(" ")
    result = "".join(word[:1].upper() + word[1:] for word in words if word)
    if not capitalize_first:
        result = result[:1].lower() + result[1:]
    return result
