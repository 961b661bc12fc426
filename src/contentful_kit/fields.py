"""Locale-aware field projection.

Entry fields travel over the wire keyed by field name and then by locale
code::

    {"title": {"en-US": "Hello", "de-DE": "Hallo"}, "slug": {"en-US": "hello"}}

Application code usually works with one locale at a time::

    {"title": "Hello", "slug": "hello"}

The functions here convert between both shapes. They operate on plain
parsed JSON (dicts and lists) and never mutate their inputs.
"""

import copy
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from .exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from .models.locale import Locale

WireFields = dict[str, dict[str, Any]]


def _require_locale(locale: str | None) -> str:
    if not locale:
        raise InvalidArgumentError("locale")
    return locale


def localize_fields(flat: Mapping[str, Any], locale: str) -> WireFields:
    """Wrap every value of a flat field map under ``locale``.

    Fields absent from ``flat`` are absent from the result; they are not
    set to ``None``.

    Args:
        flat: Field name to value for a single locale
        locale: Locale code the values belong to

    Returns:
        Wire-shaped fields

    Raises:
        InvalidArgumentError: If ``locale`` is empty

    Examples:
        >>> localize_fields({"title": "Hello", "rating": 5}, "en-US")
        {'title': {'en-US': 'Hello'}, 'rating': {'en-US': 5}}
    """
    locale = _require_locale(locale)
    return {name: {locale: copy.deepcopy(value)} for name, value in flat.items()}


def merge_locale_fields(
    wire: Mapping[str, Mapping[str, Any]],
    flat: Mapping[str, Any],
    locale: str,
) -> WireFields:
    """Write new values for one locale into existing wire-shaped fields.

    Only field names already present in ``wire`` are updated. Names that
    only appear in ``flat`` are ignored: a locale-scoped update never adds
    fields to an entry, only a full replace can.

    Args:
        wire: Current fields of the entry
        flat: New values for ``locale``
        locale: Locale code to write

    Returns:
        A new wire-shaped mapping; values for other locales are untouched

    Examples:
        >>> merge_locale_fields(
        ...     {"title": {"en-US": "Hello", "de-DE": "Hallo"}},
        ...     {"title": "Bonjour", "unknown": 1},
        ...     "fr-FR",
        ... )
        {'title': {'en-US': 'Hello', 'de-DE': 'Hallo', 'fr-FR': 'Bonjour'}}
    """
    locale = _require_locale(locale)
    merged: WireFields = {}
    for name, localized in wire.items():
        values = dict(copy.deepcopy(localized)) if localized else {}
        if name in flat:
            values[locale] = copy.deepcopy(flat[name])
        merged[name] = values
    return merged


def resolve_fields(wire: Mapping[str, Mapping[str, Any]], locale: str) -> dict[str, Any]:
    """Flatten wire-shaped fields to the values of a single locale.

    Fields that have no value for ``locale`` are omitted.

    Examples:
        >>> resolve_fields({"title": {"en-US": "Hello"}, "body": {"de-DE": "x"}}, "en-US")
        {'title': 'Hello'}
    """
    locale = _require_locale(locale)
    return {
        name: localized[locale]
        for name, localized in wire.items()
        if isinstance(localized, Mapping) and locale in localized
    }


def _unwrap_item(item: Any) -> Any:
    if not isinstance(item, dict):
        return item

    sys = item.get("sys")
    sys_type = sys.get("type") if isinstance(sys, dict) else None
    if sys_type is not None and sys_type != "Entry":
        return item

    fields = item.get("fields")
    if not isinstance(fields, dict):
        return item

    promoted = {key: value for key, value in item.items() if key != "fields"}
    promoted.update(fields)
    return promoted


def unwrap_entry_fields(document: Mapping[str, Any]) -> dict[str, Any]:
    """Promote the ``fields`` of every entry in a collection document.

    Each item whose ``sys.type`` is ``"Entry"`` (or that has no type) gets
    the children of its ``fields`` node spliced up as direct properties and
    loses the ``fields`` key. Other items are passed through unchanged.
    The item count and order are preserved.

    Args:
        document: Raw collection document with an ``items`` array

    Returns:
        A new document; ``document`` itself is left untouched

    Examples:
        >>> doc = {"total": 1, "items": [
        ...     {"sys": {"id": "a", "type": "Entry"}, "fields": {"title": "Hi"}}
        ... ]}
        >>> unwrap_entry_fields(doc)["items"]
        [{'sys': {'id': 'a', 'type': 'Entry'}, 'title': 'Hi'}]
    """
    result = copy.deepcopy(dict(document))
    result["items"] = [_unwrap_item(item) for item in result.get("items") or []]
    return result


def default_locale_code(locales: Iterable["Locale"]) -> str:
    """Return the code of the locale flagged as default.

    Raises:
        InvalidArgumentError: If ``locales`` is empty or none is the default
    """
    for locale in locales:
        if locale.default:
            return locale.code
    raise InvalidArgumentError(
        "locale", "No locale was given and the space has no default locale."
    )
