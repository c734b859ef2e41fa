"""Frontmatter predicate search with typed, loosely-coerced comparisons."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from decimal import Decimal
from enum import Enum
from typing import Any, Union

from vault_query.constants import DEFAULT_MAX_RESULTS
from vault_query.core.search_operations import note_refs
from vault_query.core.sources import DocumentSource
from vault_query.core.walker import walk
from vault_query.data_models import DocumentRef, FrontmatterMatch, Predicate, PredicateOperator
from vault_query.errors import DocumentFetchError

logger = logging.getLogger(__name__)


class ValueKind(Enum):
    """Closed set of frontmatter value shapes."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"
    SEQUENCE = "sequence"
    MAPPING = "mapping"

    @classmethod
    def of(cls, value: Any) -> ValueKind:
        """Classify a frontmatter value.

        ``bool`` is tested before numbers since it subclasses ``int``. Anything that
        is not a number, boolean, null, sequence or mapping is treated as a string.
        """
        if value is None:
            return cls.NULL
        if isinstance(value, bool):
            return cls.BOOLEAN
        if isinstance(value, (int, float)):
            return cls.NUMBER
        if isinstance(value, Mapping):
            return cls.MAPPING
        if isinstance(value, (list, tuple)):
            return cls.SEQUENCE
        return cls.STRING


def _stringify_number(value: Union[int, float]) -> str:
    """Shortest round-trip form, laid out like ECMAScript ``Number.prototype.toString``.

    Plain notation for decimal exponents in ``[-6, 21)``, otherwise ``1e-7`` /
    ``1.5e+21`` style without exponent padding.
    """
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    raw_digits = "".join(str(digit) for digit in digit_tuple)
    digits = raw_digits.rstrip("0")
    exponent += len(raw_digits) - len(digits)
    # value == 0.<digits> * 10**point
    point = exponent + len(digits)

    if len(digits) <= point <= 21:
        text = digits + "0" * (point - len(digits))
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        mantissa = digits if len(digits) == 1 else f"{digits[0]}.{digits[1:]}"
        power = point - 1
        text = f"{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"
    return sign + text


def stringify(value: Any) -> str:
    """Canonical string form used for loose comparisons.

    Examples:
        >>> stringify(1.0), stringify(True), stringify(None)
        ('1', 'true', 'null')
        >>> stringify(["a", None, 2])
        'a,,2'
    """
    kind = ValueKind.of(value)
    if kind is ValueKind.NULL:
        return "null"
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueKind.NUMBER:
        return _stringify_number(value)
    if kind is ValueKind.SEQUENCE:
        return ",".join("" if item is None else stringify(item) for item in value)
    if kind is ValueKind.MAPPING:
        return "[object Object]"
    return str(value)


def _identical(left: Any, right: Any) -> bool:
    """Strict equality: same kind and equal value."""
    kind = ValueKind.of(left)
    if kind is not ValueKind.of(right):
        return False
    if kind in (ValueKind.SEQUENCE, ValueKind.MAPPING):
        # Distinct containers are never identical, matching reference semantics
        return left is right
    return left == right


def _values_equal(field_value: Any, expected: Any) -> bool:
    return _identical(field_value, expected) or stringify(field_value) == stringify(expected)


def _value_contains(field_value: Any, expected: Any) -> bool:
    needle = stringify(expected).lower()
    kind = ValueKind.of(field_value)

    if kind is ValueKind.STRING:
        return needle in field_value.lower()
    if kind is ValueKind.SEQUENCE:
        return any(needle in stringify(item).lower() for item in field_value)
    if kind is ValueKind.MAPPING:
        return any(needle in stringify(item).lower() for item in field_value.values())
    return False


def evaluate_predicate(frontmatter: Mapping[str, Any], predicate: Predicate) -> bool:
    """Decide whether one document's frontmatter satisfies ``predicate``.

    ``exists`` checks key presence only (``None``, ``False`` and ``""`` count as
    present). ``equals`` accepts identical values or equal string forms, so ``1``
    equals ``"1"``. ``contains`` is a case-insensitive substring test over strings,
    sequence elements, or mapping values; other shapes never match. Absent fields
    never match ``equals`` or ``contains``.
    """
    if predicate.field not in frontmatter:
        return False

    operator = PredicateOperator(predicate.operator)
    if operator is PredicateOperator.EXISTS:
        return True

    field_value = frontmatter[predicate.field]
    if operator is PredicateOperator.EQUALS:
        return _values_equal(field_value, predicate.value)
    return _value_contains(field_value, predicate.value)


async def evaluate_documents(
    source: DocumentSource,
    refs: Sequence[DocumentRef],
    predicate: Predicate,
) -> list[FrontmatterMatch]:
    """Filter documents by a frontmatter predicate, preserving traversal order.

    Documents that cannot be fetched are skipped.
    """
    matches: list[FrontmatterMatch] = []
    for ref in refs:
        try:
            document = await source.fetch_document(ref.path)
        except DocumentFetchError as exc:
            logger.debug("Skipping '%s' during frontmatter search: %s", ref.path, exc)
            continue

        if evaluate_predicate(document.frontmatter, predicate):
            matches.append(FrontmatterMatch(path=ref.path, value=document.frontmatter[predicate.field]))

    return matches


async def frontmatter_search(
    source: DocumentSource,
    field: str,
    value: Any = None,
    operator: Union[PredicateOperator, str] = PredicateOperator.EQUALS,
    max_results: int = DEFAULT_MAX_RESULTS,
    *,
    root: str = "/",
) -> dict[str, Any]:
    """Find notes whose frontmatter ``field`` satisfies ``operator``/``value``.

    Returns:
        ``{"field", "operator", "results", "total"}``.

    Raises:
        ValueError: If ``operator`` is not one of ``equals``, ``contains``, ``exists``.
        NotAccessibleError: If part of the vault cannot be listed.
    """
    predicate = Predicate(field=field, operator=PredicateOperator(operator), value=value)

    refs = note_refs(await walk(source, root))
    matches = await evaluate_documents(source, refs, predicate)
    return {
        "field": field,
        "operator": predicate.operator.value,
        "results": [match.as_payload() for match in matches[:max_results]],
        "total": len(matches),
    }
