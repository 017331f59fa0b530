"""
This module contains the interface definitions that pluggable parts of the
configuration engine need to implement: member descriptors and the accessor
compiler that produces them, and the four convention contracts consulted when
a declaration is left unspecified.

"""
import abc
import typing

Selector = typing.Union[str, typing.Callable[[typing.Any], typing.Any]]
"""
Designates a single member of a representation type, either by name or by a
one-argument callable that performs exactly one attribute access on its argument
(``lambda post: post.title``).
"""

Getter = typing.Callable[[typing.Any], typing.Any]
Setter = typing.Callable[[typing.Any, typing.Any], None]


class MemberDescriptor(metaclass=abc.ABCMeta):
    """
    A :py:class:`MemberDescriptor` describes a single member of a representation type
    and how to read it from (and possibly write it to) its instances.

    This class has nothing to do with Python's sense of "descriptors."
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """
        Returns the member's name as it appears in the representation type.
        """
        ...  # pragma: nocover

    @property
    @abc.abstractmethod
    def owner(self) -> type:
        """
        Returns the representation type the member belongs to.
        """
        ...  # pragma: nocover

    @property
    @abc.abstractmethod
    def annotation(self) -> typing.Any:
        """
        Returns the member's declared type annotation as written, which may be a
        string or a :py:class:`typing.ForwardRef`.  In case the type is
        indeterminable, returns None.
        """
        ...  # pragma: nocover

    @property
    @abc.abstractmethod
    def writable(self) -> bool:
        """
        Returns :py:const:`True` if a value can be stored to the member.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def get(self, target: typing.Any) -> typing.Any:
        """
        Fetches the member's value from the target object.

        :param Any target: An instance of the owning representation type.
        :return: The fetched value.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def set(self, target: typing.Any, value: typing.Any) -> None:
        """
        Stores a value to the member of the target object.

        :param Any target: An instance of the owning representation type.
        :param Any value: The value to store.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def shape(self) -> typing.Tuple[bool, typing.Optional[type]]:
        """
        Infers whether the member holds a collection, and the type of the value
        (or of the items, for collections).

        :return: A tuple of the collection flag and the element type, which is None
                 if indeterminable.
        :raises NameError: if the annotation refers to a type that cannot be resolved.
        """
        ...  # pragma: nocover


class AccessorCompiler(metaclass=abc.ABCMeta):
    """
    An :py:class:`AccessorCompiler` turns selectors into :py:class:`MemberDescriptor`
    objects and enumerates the members of representation types.
    """

    @abc.abstractmethod
    def compile(self, class_: type, selector: typing.Any) -> MemberDescriptor:
        """
        Compiles a selector that denotes a direct member access on ``class_``.

        :param type class_: The representation type.
        :param Any selector: The selector.
        :return: A :py:class:`MemberDescriptor` for the member.
        :raises InvalidAccessorError: if the selector is anything but a direct member access.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def compile_getter(self, class_: type, selector: typing.Any) -> Getter:
        """
        Compiles a selector for reading a value derived from an instance of ``class_``.
        Unlike :py:meth:`compile`, the selector may compute the value.

        :param type class_: The representation type.
        :param Any selector: The selector.
        :return: A getter function.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def members(self, class_: type) -> typing.Sequence[MemberDescriptor]:
        """
        Returns descriptors for the members of ``class_`` subject to scanning,
        in declaration order.
        """
        ...  # pragma: nocover


class ResourceTypeConvention(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def get_resource_type(self, class_: type) -> typing.Optional[str]:
        """
        Returns the resource type name for the representation type, or None to defer
        to the conventions registered earlier.
        """
        ...  # pragma: nocover


class LinkNameConvention(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def get_link_name(self, member: MemberDescriptor) -> typing.Optional[str]:
        """
        Returns the relationship name for the member, or None to defer to the
        conventions registered earlier.
        """
        ...  # pragma: nocover


class LinkIdConvention(metaclass=abc.ABCMeta):
    @abc.abstractmethod
    def get_id_selector(self, member: MemberDescriptor) -> typing.Optional[Selector]:
        """
        Returns a selector that reads the related object's identifier straight from
        the parent object, or None if there is no such shortcut.
        """
        ...  # pragma: nocover


class PropertyScanningConvention(metaclass=abc.ABCMeta):
    @property
    @abc.abstractmethod
    def throw_on_unmapped_linked_type(self) -> bool:
        """
        Set to :py:const:`True` if a discovered relationship whose target type cannot
        be mapped should fail the build instead of being skipped.
        """
        ...  # pragma: nocover

    @abc.abstractmethod
    def is_primary_id(self, member: MemberDescriptor) -> bool:
        ...  # pragma: nocover

    @abc.abstractmethod
    def is_linked_resource(self, member: MemberDescriptor) -> bool:
        ...  # pragma: nocover

    @abc.abstractmethod
    def should_ignore(self, member: MemberDescriptor) -> bool:
        ...  # pragma: nocover

    @abc.abstractmethod
    def get_property_name(self, member: MemberDescriptor) -> str:
        ...  # pragma: nocover


Convention = typing.Union[
    ResourceTypeConvention,
    LinkNameConvention,
    LinkIdConvention,
    PropertyScanningConvention,
]
