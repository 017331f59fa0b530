import typing

from .interfaces import (
    Convention,
    LinkIdConvention,
    LinkNameConvention,
    MemberDescriptor,
    PropertyScanningConvention,
    ResourceTypeConvention,
    Selector,
)
from .utils import english_enumerate

CONTRACTS: typing.Tuple[type, ...] = (
    ResourceTypeConvention,
    LinkNameConvention,
    LinkIdConvention,
    PropertyScanningConvention,
)

Tc = typing.TypeVar("Tc")


class ConventionChain:
    """
    A :py:class:`ConventionChain` holds the convention strategies in registration order.
    When asked for a facet, it consults the strategies that implement the contract
    for it, most recently registered first, and the first answer other than None wins.
    """

    _conventions: typing.List[Convention]

    def add(self, convention: Convention) -> None:
        if not isinstance(convention, CONTRACTS):
            raise TypeError(
                f"{convention!r} implements none of "
                + english_enumerate((c.__name__ for c in CONTRACTS), conj=", or ")
            )
        self._conventions.append(convention)

    def of(self, contract: typing.Type[Tc]) -> typing.Iterator[Tc]:
        """
        Iterates over the strategies that implement ``contract``, most recent first.
        """
        for convention in reversed(self._conventions):
            if isinstance(convention, contract):
                yield convention

    def resource_type_for(self, class_: type) -> typing.Optional[str]:
        for convention in self.of(ResourceTypeConvention):
            name = convention.get_resource_type(class_)
            if name is not None:
                return name
        return None

    def link_name_for(self, member: MemberDescriptor) -> typing.Optional[str]:
        for convention in self.of(LinkNameConvention):
            name = convention.get_link_name(member)
            if name is not None:
                return name
        return None

    def id_selector_for(self, member: MemberDescriptor) -> typing.Optional[Selector]:
        for convention in self.of(LinkIdConvention):
            selector = convention.get_id_selector(member)
            if selector is not None:
                return selector
        return None

    @property
    def property_scanning(self) -> typing.Optional[PropertyScanningConvention]:
        return next(self.of(PropertyScanningConvention), None)

    def __iter__(self) -> typing.Iterator[Convention]:
        return iter(self._conventions)

    def __len__(self) -> int:
        return len(self._conventions)

    def __init__(self, conventions: typing.Iterable[Convention] = ()):
        self._conventions = []
        for convention in conventions:
            self.add(convention)
