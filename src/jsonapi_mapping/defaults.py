import collections.abc
import datetime
import decimal
import enum
import typing
import uuid

from .accessors import has_member
from .builder import ConfigurationBuilder
from .interfaces import (
    AccessorCompiler,
    LinkIdConvention,
    LinkNameConvention,
    MemberDescriptor,
    PropertyScanningConvention,
    ResourceTypeConvention,
    Selector,
)
from .utils import camelize, pluralize

SCALAR_TYPES: typing.Tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    int,
    float,
    complex,
    bool,
    decimal.Decimal,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    enum.Enum,
    collections.abc.Mapping,
)


class CamelCaseLinkNameConvention(LinkNameConvention):
    """
    Names relationships after their members in camelCase (``blog_posts`` to ``blogPosts``.)
    """

    def get_link_name(self, member: MemberDescriptor) -> typing.Optional[str]:
        return camelize(member.name)


class PluralizedCamelCaseTypeConvention(ResourceTypeConvention):
    """
    Names resources after the pluralized class name in camelCase
    (``BlogPost`` to ``blogPosts``, ``Category`` to ``categories``.)
    """

    def get_resource_type(self, class_: type) -> typing.Optional[str]:
        return camelize(pluralize(class_.__name__))


class SimpleLinkedIdConvention(LinkIdConvention):
    """
    Reads the identifier of a related object from the sibling member with the suffix
    appended to the relationship member's name (``author`` to ``author_id``.)
    Collections are not handled.
    """

    suffix: str

    def get_id_selector(self, member: MemberDescriptor) -> typing.Optional[Selector]:
        try:
            is_collection, _ = member.shape()
        except NameError:
            is_collection = False
        if is_collection:
            return None
        name = member.name + self.suffix
        if not has_member(member.owner, name):
            return None
        return name

    def __init__(self, suffix: str = "_id"):
        self.suffix = suffix


class DefaultPropertyScanningConvention(PropertyScanningConvention):
    """
    Takes the member named ``id`` for the identifier and members holding (collections of)
    instances of non-scalar classes for related resources.  Members whose annotation
    refers to a class that is not defined yet are assumed to be related resources too.

    :param str id_name: The name of the identifier member.
    :param Iterable[str] ignored: The names of the members to leave out.
    :param bool throw_on_unmapped_linked_type: Whether relationships with unmappable
                                               targets fail the build.
    """

    id_name: str
    ignored: typing.FrozenSet[str]
    _throw_on_unmapped_linked_type: bool

    @property
    def throw_on_unmapped_linked_type(self) -> bool:
        return self._throw_on_unmapped_linked_type

    def is_primary_id(self, member: MemberDescriptor) -> bool:
        return member.name == self.id_name

    def is_linked_resource(self, member: MemberDescriptor) -> bool:
        try:
            _, element_type = member.shape()
        except NameError:
            return True
        if not isinstance(element_type, type) or element_type in (typing.Any, object):
            return False
        return not issubclass(element_type, SCALAR_TYPES)

    def should_ignore(self, member: MemberDescriptor) -> bool:
        return member.name in self.ignored

    def get_property_name(self, member: MemberDescriptor) -> str:
        return camelize(member.name)

    def __init__(
        self,
        id_name: str = "id",
        ignored: typing.Iterable[str] = (),
        throw_on_unmapped_linked_type: bool = True,
    ):
        self.id_name = id_name
        self.ignored = frozenset(ignored)
        self._throw_on_unmapped_linked_type = throw_on_unmapped_linked_type


def builder_with_defaults(
    accessor_compiler: typing.Optional[AccessorCompiler] = None,
) -> ConfigurationBuilder:
    """
    Returns a :py:class:`ConfigurationBuilder` with the built-in conventions registered.
    """
    return (
        ConfigurationBuilder(accessor_compiler)
        .with_convention(DefaultPropertyScanningConvention())
        .with_convention(CamelCaseLinkNameConvention())
        .with_convention(PluralizedCamelCaseTypeConvention())
        .with_convention(SimpleLinkedIdConvention())
    )
