"""
The second phase of building a :py:class:`Configuration`.

Every declared relationship is resolved to the representation type it points at,
types reached only as relationship targets get an empty configuration of their own,
every configuration is compiled into a :py:class:`ResourceMapping`, and finally the
relationship descriptors are linked to the mappings of their targets.  All of it runs
over flat collections, so cyclic relationships need no special treatment.

"""
import logging
import typing
from collections import OrderedDict

from .conventions import ConventionChain
from .declarative import PendingRelationship, ResourceConfiguration, ResourceMetadata
from .exceptions import InvalidAccessorError, UnresolvedRelationshipError
from .interfaces import AccessorCompiler
from .models import Configuration, RelationshipDescriptor, ResourceMapping

logger = logging.getLogger(__name__)


class ResolvedRelationship(typing.NamedTuple):
    pending: PendingRelationship
    is_collection: bool
    target: type


class GraphLinker:
    accessor_compiler: AccessorCompiler
    conventions: ConventionChain
    configurations: typing.Dict[type, ResourceConfiguration]
    auto_registered: typing.List[ResourceConfiguration]

    def resolve_target(
        self, metadata: ResourceMetadata, rel: PendingRelationship
    ) -> typing.Optional[ResolvedRelationship]:
        """
        Determines the shape and the target representation type of a relationship.
        Returns None if the target is unresolvable and the relationship may be skipped.

        :raises UnresolvedRelationshipError: if the target is unresolvable and the relationship
                                             must not be skipped.
        """
        reason: typing.Optional[str] = None
        is_collection, element_type = False, rel.related_type
        try:
            is_collection, element_type = rel.member.shape()
        except NameError as e:
            if rel.related_type is None:
                reason = f"annotation of {rel.member.name} cannot be resolved ({e})"
        if rel.related_type is not None:
            element_type = rel.related_type
        if reason is None and (
            not isinstance(element_type, type) or element_type in (typing.Any, object)
        ):
            reason = f"type of the related resource is indeterminable ({element_type!r})"

        if reason is not None:
            if rel.throw_on_unmapped_linked_type:
                raise UnresolvedRelationshipError(metadata.representation_type, rel.name, reason)
            logger.warning(
                "skipping relationship %s of %s: %s",
                rel.name,
                metadata.representation_type.__qualname__,
                reason,
            )
            return None

        if is_collection and rel.id_declared:
            raise InvalidAccessorError(
                metadata.representation_type,
                f"relationship {rel.name} is a collection and cannot have an id selector",
            )
        return ResolvedRelationship(rel, is_collection, typing.cast(type, element_type))

    def ensure_configuration(self, representation_type: type) -> ResourceConfiguration:
        configuration = self.configurations.get(representation_type)
        if configuration is None:
            configuration = ResourceConfiguration(
                representation_type, self.accessor_compiler, self.conventions
            )
            self.configurations[representation_type] = configuration
            self.auto_registered.append(configuration)
            logger.debug(
                "auto-registered %s as a relationship target", representation_type.__qualname__
            )
        return configuration

    def resource_type_for(self, metadata: ResourceMetadata) -> str:
        if metadata.resource_type is not None:
            return metadata.resource_type
        name = self.conventions.resource_type_for(metadata.representation_type)
        if name is not None:
            return name
        return metadata.representation_type.__name__

    def compile(
        self,
        metadata: ResourceMetadata,
        resolved_rels: typing.Sequence[ResolvedRelationship],
    ) -> ResourceMapping:
        return ResourceMapping(
            representation_type=metadata.representation_type,
            resource_type=self.resource_type_for(metadata),
            id_getter=metadata.id_getter,
            attributes=metadata.attributes.items(),
            relationships=[
                RelationshipDescriptor(
                    name=r.pending.name,
                    is_collection=r.is_collection,
                    parent_type=metadata.representation_type,
                    related_base_type=r.target,
                    related_resource=r.pending.member.get,
                    related_resource_id=r.pending.id_getter,
                    related_resource_type=r.pending.resource_type,
                    inclusion_rule=r.pending.inclusion_rule,
                )
                for r in resolved_rels
            ],
        )

    def __call__(self) -> Configuration:
        resolved: typing.Dict[
            type, typing.Tuple[ResourceMetadata, typing.List[ResolvedRelationship]]
        ] = OrderedDict()

        # the work list grows as targets get auto-registered
        work_list = list(self.configurations.values())
        i = 0
        while i < len(work_list):
            configuration = work_list[i]
            i += 1
            metadata = configuration.constructed_metadata
            resolved_rels: typing.List[ResolvedRelationship] = []
            for rel in metadata.relationships.values():
                r = self.resolve_target(metadata, rel)
                if r is None:
                    continue
                if r.target not in self.configurations:
                    work_list.append(self.ensure_configuration(r.target))
                resolved_rels.append(r)
            resolved[configuration.representation_type] = (metadata, resolved_rels)

        mappings: typing.Dict[type, ResourceMapping] = OrderedDict(
            (representation_type, self.compile(metadata, resolved_rels))
            for representation_type, (metadata, resolved_rels) in resolved.items()
        )

        for mapping in mappings.values():
            for rel_descr in mapping.relationships:
                rel_descr._link(mappings[rel_descr.related_base_type])

        logger.debug(
            "linked %d mapping(s), %d auto-registered",
            len(mappings),
            len(self.auto_registered),
        )
        return Configuration(mappings.values())

    def __init__(
        self,
        configurations: typing.Mapping[type, ResourceConfiguration],
        accessor_compiler: AccessorCompiler,
        conventions: ConventionChain,
    ):
        self.accessor_compiler = accessor_compiler
        self.conventions = conventions
        self.configurations = OrderedDict(configurations)
        self.auto_registered = []
