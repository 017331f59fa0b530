import enum
import types
import typing
from collections import OrderedDict

from .exceptions import MappingNotFoundError
from .interfaces import Getter, Setter


class InclusionRule(enum.Enum):
    """
    Governs whether the related data of a relationship is embedded in a compound
    document.  The interpretation is left to the document writer.
    """

    ALWAYS = "always"
    NEVER = "never"
    SMART = "smart"
    """Defers the decision to the request (``include`` and sparse fieldsets.)"""


class Accessor(typing.NamedTuple):
    getter: Getter
    setter: typing.Optional[Setter] = None


class RelationshipDescriptor:
    """
    A :py:class:`RelationshipDescriptor` describes a relationship from the resources
    of a :py:class:`ResourceMapping` to another resource (or a collection of them).
    """

    _name: str
    _is_collection: bool
    _parent_type: type
    _related_base_type: type
    _related_resource_type: typing.Optional[str]
    _related_resource: Getter
    _related_resource_id: typing.Optional[Getter]
    _inclusion_rule: InclusionRule
    _resource_mapping: typing.Optional["ResourceMapping"] = None

    @property
    def name(self) -> str:
        """
        The name of the relationship, unique within its owning mapping.
        """
        return self._name

    @property
    def is_collection(self) -> bool:
        return self._is_collection

    @property
    def parent_type(self) -> type:
        return self._parent_type

    @property
    def related_base_type(self) -> type:
        return self._related_base_type

    @property
    def related_resource_type(self) -> str:
        """
        The resource type name of the related resources.  Unless it was overridden
        in the declaration, it is the one of :py:attr:`resource_mapping`.
        """
        if self._related_resource_type is not None:
            return self._related_resource_type
        return self.resource_mapping.resource_type

    @property
    def related_resource(self) -> Getter:
        """
        A function that returns the related object (or the collection of them)
        given a parent object.
        """
        return self._related_resource

    @property
    def related_resource_id(self) -> typing.Optional[Getter]:
        """
        A function that returns the identifier of the related object straight from
        a parent object, if available.  Always None for collections.
        """
        return self._related_resource_id

    @property
    def inclusion_rule(self) -> InclusionRule:
        return self._inclusion_rule

    @property
    def resource_mapping(self) -> "ResourceMapping":
        """
        The mapping of the related resource.
        """
        assert self._resource_mapping is not None, "relationship is not linked"
        return self._resource_mapping

    def _link(self, mapping: "ResourceMapping") -> None:
        assert self._resource_mapping is None
        self._resource_mapping = mapping

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._parent_type.__qualname__}.{self._name} -> "
            f"{self._related_base_type.__qualname__}{'[]' if self._is_collection else ''})"
        )

    def __init__(
        self,
        name: str,
        is_collection: bool,
        parent_type: type,
        related_base_type: type,
        related_resource: Getter,
        related_resource_id: typing.Optional[Getter] = None,
        related_resource_type: typing.Optional[str] = None,
        inclusion_rule: InclusionRule = InclusionRule.SMART,
    ):
        self._name = name
        self._is_collection = is_collection
        self._parent_type = parent_type
        self._related_base_type = related_base_type
        self._related_resource = related_resource
        self._related_resource_id = None if is_collection else related_resource_id
        self._related_resource_type = related_resource_type
        self._inclusion_rule = inclusion_rule


class ResourceMapping:
    """
    A :py:class:`ResourceMapping` holds the compiled metadata of a single
    representation type.

    :param type representation_type: The representation type.
    :param str resource_type: The resource type name.
    :param Optional[Callable] id_getter: The function that extracts an identifier from an instance.
    :param Iterable[Tuple[str, Accessor]] attributes: The attribute names and their accessors.
    :param Iterable[RelationshipDescriptor] relationships: The relationships the resource has.
    """

    _representation_type: type
    _resource_type: str
    _id_getter: typing.Optional[Getter]
    _attributes: typing.Mapping[str, Accessor]
    _relationships: typing.Tuple[RelationshipDescriptor, ...]
    _relationships_by_name: typing.Mapping[str, RelationshipDescriptor]

    @property
    def representation_type(self) -> type:
        return self._representation_type

    @property
    def resource_type(self) -> str:
        return self._resource_type

    @property
    def id_getter(self) -> typing.Optional[Getter]:
        return self._id_getter

    @property
    def attributes(self) -> typing.Mapping[str, Accessor]:
        """
        The read-only, ordered mapping of attribute names to their accessors.
        """
        return self._attributes

    @property
    def property_getters(self) -> typing.Mapping[str, Getter]:
        return types.MappingProxyType(
            OrderedDict((name, accessor.getter) for name, accessor in self._attributes.items())
        )

    @property
    def property_setters(self) -> typing.Mapping[str, Setter]:
        """
        The setters of the attributes; read-only members have none.
        """
        return types.MappingProxyType(
            OrderedDict(
                (name, accessor.setter)
                for name, accessor in self._attributes.items()
                if accessor.setter is not None
            )
        )

    @property
    def relationships(self) -> typing.Tuple[RelationshipDescriptor, ...]:
        return self._relationships

    def get_relationship(self, name: str) -> RelationshipDescriptor:
        """
        Returns the relationship named ``name``.

        :raises KeyError: if there is no such relationship.
        """
        return self._relationships_by_name[name]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._representation_type.__qualname__}, {self._resource_type!r})"

    def __init__(
        self,
        representation_type: type,
        resource_type: str,
        id_getter: typing.Optional[Getter] = None,
        attributes: typing.Iterable[typing.Tuple[str, Accessor]] = (),
        relationships: typing.Iterable[RelationshipDescriptor] = (),
    ):
        self._representation_type = representation_type
        self._resource_type = resource_type
        self._id_getter = id_getter
        self._attributes = types.MappingProxyType(OrderedDict(attributes))
        self._relationships = tuple(relationships)
        self._relationships_by_name = types.MappingProxyType(
            {rel.name: rel for rel in self._relationships}
        )


class Configuration:
    """
    A :py:class:`Configuration` is the frozen result of
    :py:meth:`ConfigurationBuilder.build`.  It holds one :py:class:`ResourceMapping`
    per representation type that was declared or reached as a relationship target.
    """

    _mappings: typing.Mapping[type, ResourceMapping]
    _mappings_by_resource_type: typing.Mapping[str, ResourceMapping]

    @property
    def mappings(self) -> typing.Mapping[type, ResourceMapping]:
        return self._mappings

    def is_mapping_registered(self, representation_type: type) -> bool:
        return representation_type in self._mappings

    def get_mapping(self, representation_type: type) -> ResourceMapping:
        """
        Returns the mapping for the representation type.

        :raises MappingNotFoundError: if no mapping is registered for the type.
        """
        try:
            return self._mappings[representation_type]
        except KeyError:
            raise MappingNotFoundError(representation_type)

    def find_mapping(self, representation_type: type) -> ResourceMapping:
        """
        Returns the mapping for the representation type or, failing that, for the
        nearest of its base classes.

        :raises MappingNotFoundError: if neither the type nor its bases are registered.
        """
        for class_ in representation_type.__mro__:
            mapping = self._mappings.get(class_)
            if mapping is not None:
                return mapping
        raise MappingNotFoundError(representation_type)

    def get_mapping_by_resource_type(self, resource_type: str) -> ResourceMapping:
        """
        Returns the mapping whose resource type name is ``resource_type``.  When several
        representation types share the name, the first registered one is returned.

        :raises MappingNotFoundError: if no mapping has the name.
        """
        try:
            return self._mappings_by_resource_type[resource_type]
        except KeyError:
            raise MappingNotFoundError(resource_type)

    def __contains__(self, representation_type: typing.Any) -> bool:
        return representation_type in self._mappings

    def __iter__(self) -> typing.Iterator[ResourceMapping]:
        return iter(self._mappings.values())

    def __len__(self) -> int:
        return len(self._mappings)

    def __init__(self, mappings: typing.Iterable[ResourceMapping]):
        _mappings: typing.Dict[type, ResourceMapping] = OrderedDict()
        by_resource_type: typing.Dict[str, ResourceMapping] = {}
        for mapping in mappings:
            _mappings[mapping.representation_type] = mapping
            by_resource_type.setdefault(mapping.resource_type, mapping)
        self._mappings = types.MappingProxyType(_mappings)
        self._mappings_by_resource_type = types.MappingProxyType(by_resource_type)
