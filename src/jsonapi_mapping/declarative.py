import dataclasses
import logging
import typing
from collections import OrderedDict

from .conventions import ConventionChain
from .exceptions import InvalidDeclarationError
from .interfaces import AccessorCompiler, Getter, MemberDescriptor, PropertyScanningConvention
from .models import Accessor, InclusionRule

logger = logging.getLogger(__name__)

T = typing.TypeVar("T")


@dataclasses.dataclass
class PendingRelationship:
    """
    A relationship as declared, before its target has been resolved to a mapping.
    """

    name: str
    member: MemberDescriptor
    id_getter: typing.Optional[Getter] = None
    id_declared: bool = False
    related_type: typing.Optional[type] = None
    resource_type: typing.Optional[str] = None
    inclusion_rule: InclusionRule = InclusionRule.SMART
    throw_on_unmapped_linked_type: bool = True


@dataclasses.dataclass
class ResourceMetadata:
    """
    The intermediate, not-yet-linked metadata of a representation type.
    """

    representation_type: type
    resource_type: typing.Optional[str] = None
    id_getter: typing.Optional[Getter] = None
    attributes: typing.Dict[str, Accessor] = dataclasses.field(default_factory=OrderedDict)
    relationships: typing.Dict[str, PendingRelationship] = dataclasses.field(
        default_factory=OrderedDict
    )


Declaration = typing.Callable[[ResourceMetadata], None]


def accessor_for(member: MemberDescriptor) -> Accessor:
    return Accessor(member.get, member.set if member.writable else None)


class ResourceConfiguration(typing.Generic[T]):
    """
    A :py:class:`ResourceConfiguration` accumulates the declarations for a single
    representation type.  Every method returns the configuration itself so that
    calls can be chained.

    Selectors are compiled as soon as they are declared, so malformed ones are
    reported at the offending call.  Conventions, on the other hand, are consulted
    when the metadata is constructed, which lets them be registered in any order
    relative to the declarations.
    """

    representation_type: typing.Type[T]
    accessor_compiler: AccessorCompiler
    conventions: ConventionChain
    _resource_type: typing.Optional[str] = None
    _declarations: typing.List[Declaration]
    _explicit_members: typing.Set[str]
    _id_declared: bool = False

    def _declare(self, declaration: Declaration) -> "ResourceConfiguration[T]":
        self._declarations.append(declaration)
        return self

    def _require_property_scanning(self) -> PropertyScanningConvention:
        scanning = self.conventions.property_scanning
        if scanning is None:
            raise InvalidDeclarationError(
                f"scanning the members of {self.representation_type.__qualname__} "
                "requires a property scanning convention"
            )
        return scanning

    def _pending_relationship(
        self,
        member: MemberDescriptor,
        name: typing.Optional[str],
        id_getter: typing.Optional[Getter],
        **kwargs,
    ) -> PendingRelationship:
        if name is None:
            name = self.conventions.link_name_for(member)
            if name is None:
                name = member.name
        id_declared = id_getter is not None
        if id_getter is None:
            id_selector = self.conventions.id_selector_for(member)
            if id_selector is not None:
                id_getter = self.accessor_compiler.compile_getter(
                    self.representation_type, id_selector
                )
        return PendingRelationship(
            name=name,
            member=member,
            id_getter=id_getter,
            id_declared=id_declared,
            **kwargs,
        )

    def with_id_selector(self, selector: typing.Any) -> "ResourceConfiguration[T]":
        """
        Declares the member that holds the identifier.  The last call wins.
        """
        member = self.accessor_compiler.compile(self.representation_type, selector)
        self._explicit_members.add(member.name)
        self._id_declared = True

        def _(metadata: ResourceMetadata) -> None:
            metadata.id_getter = member.get

        return self._declare(_)

    def with_simple_property(
        self, selector: typing.Any, name: typing.Optional[str] = None
    ) -> "ResourceConfiguration[T]":
        """
        Declares an attribute.

        :param selector: The selector for the member.
        :param name: The attribute name.  If omitted, the property scanning convention
                     names it, or the member name is used as is.
        """
        member = self.accessor_compiler.compile(self.representation_type, selector)
        self._explicit_members.add(member.name)

        def _(metadata: ResourceMetadata) -> None:
            attr_name = name
            if attr_name is None:
                scanning = self.conventions.property_scanning
                attr_name = (
                    scanning.get_property_name(member) if scanning is not None else member.name
                )
            metadata.attributes[attr_name] = accessor_for(member)

        return self._declare(_)

    def _scan_simple_properties(self, metadata: ResourceMetadata) -> None:
        scanning = self._require_property_scanning()
        # an explicitly declared identifier is kept
        id_found = self._id_declared
        for member in self.accessor_compiler.members(self.representation_type):
            if member.name in self._explicit_members or scanning.should_ignore(member):
                continue
            if scanning.is_primary_id(member):
                if not id_found:
                    metadata.id_getter = member.get
                    id_found = True
                continue
            if scanning.is_linked_resource(member):
                continue
            metadata.attributes[scanning.get_property_name(member)] = accessor_for(member)

    def with_all_simple_properties(self) -> "ResourceConfiguration[T]":
        """
        Declares the identifier and every attribute that the property scanning convention
        finds.  Members taken for related resources are left out, and so are the members
        declared explicitly, whichever order the calls are made in.
        """
        return self._declare(self._scan_simple_properties)

    def with_all_properties(self) -> "ResourceConfiguration[T]":
        """
        Detects the identifier and the attributes in a single scan.  Relationships are not
        declared by this; call :py:meth:`with_all_linked_resources` as well if needed.
        """
        return self._declare(self._scan_simple_properties)

    def with_linked_resource(
        self,
        selector: typing.Any,
        id_selector: typing.Any = None,
        resource_type: typing.Optional[str] = None,
        name: typing.Optional[str] = None,
        inclusion_rule: InclusionRule = InclusionRule.SMART,
        related_type: typing.Optional[type] = None,
    ) -> "ResourceConfiguration[T]":
        """
        Declares a relationship.  Whether it is to-one or to-many is inferred from the
        type annotation of the member.

        :param selector: The selector for the member that holds the related object(s).
        :param id_selector: A member name or a function that reads the identifier of
                            the related object from the parent object.
        :param resource_type: Overrides the resource type of the related resource.
        :param name: The relationship name.
        :param inclusion_rule: The :py:class:`InclusionRule` for the relationship.
        :param related_type: The representation type of the related resource, for members
                             whose annotation does not tell.
        """
        member = self.accessor_compiler.compile(self.representation_type, selector)
        self._explicit_members.add(member.name)
        id_getter: typing.Optional[Getter] = None
        if id_selector is not None:
            id_getter = self.accessor_compiler.compile_getter(
                self.representation_type, id_selector
            )

        def _(metadata: ResourceMetadata) -> None:
            rel = self._pending_relationship(
                member,
                name,
                id_getter,
                related_type=related_type,
                resource_type=resource_type,
                inclusion_rule=inclusion_rule,
            )
            metadata.relationships[rel.name] = rel

        return self._declare(_)

    def _scan_linked_resources(self, metadata: ResourceMetadata) -> None:
        scanning = self._require_property_scanning()
        throw = scanning.throw_on_unmapped_linked_type
        for member in self.accessor_compiler.members(self.representation_type):
            if member.name in self._explicit_members or scanning.should_ignore(member):
                continue
            if not scanning.is_linked_resource(member):
                continue
            rel = self._pending_relationship(
                member,
                None,
                None,
                throw_on_unmapped_linked_type=throw,
            )
            metadata.relationships[rel.name] = rel

    def with_all_linked_resources(self) -> "ResourceConfiguration[T]":
        """
        Declares a relationship for every member the property scanning convention takes
        for a related resource, except the ones declared explicitly.
        """
        return self._declare(self._scan_linked_resources)

    def with_resource_type(self, name: str) -> "ResourceConfiguration[T]":
        """
        Sets the resource type name, which also is what relationships of other
        resources refer to.
        """
        self._resource_type = name
        return self

    @property
    def constructed_metadata(self) -> ResourceMetadata:
        """
        Constructs the metadata from the declarations made so far.
        """
        metadata = ResourceMetadata(
            representation_type=self.representation_type,
            resource_type=self._resource_type,
        )
        for declaration in self._declarations:
            declaration(metadata)
        logger.debug(
            "constructed metadata for %s: %d attribute(s), %d relationship(s)",
            self.representation_type.__qualname__,
            len(metadata.attributes),
            len(metadata.relationships),
        )
        return metadata

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.representation_type.__qualname__})"

    def __init__(
        self,
        representation_type: typing.Type[T],
        accessor_compiler: AccessorCompiler,
        conventions: ConventionChain,
    ):
        self.representation_type = representation_type
        self.accessor_compiler = accessor_compiler
        self.conventions = conventions
        self._declarations = []
        self._explicit_members = set()
