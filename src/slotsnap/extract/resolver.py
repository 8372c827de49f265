"""Type descriptor resolution."""

from slotsnap.errors import ResolutionFailure
from slotsnap.models import ContractIdentity, StorageLayout

__all__ = ["resolve_byte_width"]


def resolve_byte_width(
    layout: StorageLayout,
    type_ref: str,
    *,
    identity: ContractIdentity,
    unit_origin: str | None = None,
) -> str:
    """Return the storage byte width of ``type_ref``.

    Parameters
    ----------
    layout : StorageLayout
        Layout whose type dictionary is searched.
    type_ref : str
        Type reference of a storage entry.
    identity : ContractIdentity
        Owning contract, reported on failure.
    unit_origin : str | None, optional
        Owning compilation unit, reported on failure.

    Returns
    -------
    str
        Decimal-encoded ``numberOfBytes``.

    Raises
    ------
    ResolutionFailure
        If the type dictionary has no entry for ``type_ref``.
    """
    descriptor = layout.types.get(type_ref)
    if descriptor is None:
        raise ResolutionFailure(type_ref, identity, unit_origin)
    return descriptor.number_of_bytes
