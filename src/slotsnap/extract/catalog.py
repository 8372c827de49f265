"""Contract catalog: every known contract identity in processing order."""

import unicodedata
from collections.abc import Iterable

from slotsnap.models import ContractIdentity

__all__ = ["build_catalog", "locale_sort_key"]

# Root-collation groups: whitespace, punctuation, symbols, currency, digits, letters
_SPACE, _PUNCT, _SYMBOL, _CURRENCY, _DIGIT, _LETTER, _OTHER = range(7)

CharWeight = tuple[int, int, str]


def _char_weight(c: str) -> CharWeight:
    """Primary weight of one character; ``_`` leads the punctuation group."""
    category = unicodedata.category(c)
    if category.startswith("Z") or c.isspace():
        group = _SPACE
    elif category.startswith("P"):
        return (_PUNCT, 0 if c == "_" else 1, c)
    elif category == "Sc":
        group = _CURRENCY
    elif category.startswith("S"):
        group = _SYMBOL
    elif category.startswith("N"):
        group = _DIGIT
    elif category.startswith("L"):
        group = _LETTER
    else:
        group = _OTHER
    return (group, 0, c)


def locale_sort_key(
    text: str,
) -> tuple[tuple[CharWeight, ...], str, tuple[bool, ...], str]:
    """Build a collation key approximating locale-aware comparison.

    Strings are compared by letters first, ignoring accents and case. As in
    the root collation, punctuation sorts before symbols, symbols before
    digits and digits before letters, so ``Vault_V2 < Vault$ < Vault2 <
    VaultA``. Ties are broken by accents, then by case with lowercase
    first, and finally by code point so the order is total.

    Parameters
    ----------
    text : str
        String to collate.

    Returns
    -------
    tuple[tuple[CharWeight, ...], str, tuple[bool, ...], str]
        Primary, secondary, tertiary and final keys.
    """
    nfd = unicodedata.normalize("NFD", text)
    base = "".join(c for c in nfd if unicodedata.category(c) != "Mn")
    return (
        tuple(_char_weight(c) for c in base.casefold()),
        nfd.casefold(),
        tuple(c.isupper() for c in base),
        text,
    )


def build_catalog(identities: Iterable[ContractIdentity]) -> tuple[ContractIdentity, ...]:
    """Order contract identities for deterministic processing.

    Identities are sorted ascending by declared name using
    :func:`locale_sort_key`. The sort is stable, so identities sharing a
    name keep their input order. Repeated identities are collapsed.

    Parameters
    ----------
    identities : Iterable[ContractIdentity]
        Every contract identity known to the project.

    Returns
    -------
    tuple[ContractIdentity, ...]
        Catalog in processing order.
    """
    unique = list(dict.fromkeys(identities))
    return tuple(sorted(unique, key=lambda identity: locale_sort_key(identity.declared_name)))
