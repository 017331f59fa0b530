import logging
import types
import typing
from collections import OrderedDict

from .accessors import DefaultAccessorCompiler
from .conventions import ConventionChain
from .declarative import ResourceConfiguration
from .interfaces import AccessorCompiler, Convention
from .linker import GraphLinker
from .models import Configuration

logger = logging.getLogger(__name__)

T = typing.TypeVar("T")


class ConfigurationBuilder:
    """
    A :py:class:`ConfigurationBuilder` is the entry point for declaring resources.

    .. code-block:: python

       builder = ConfigurationBuilder()
       builder.with_convention(PluralizedCamelCaseTypeConvention())
       builder.resource(Post).with_id_selector(lambda p: p.id).with_simple_property(
           lambda p: p.title
       ).with_linked_resource(lambda p: p.author)
       configuration = builder.build()

    Builders are not thread-safe; build the configuration once at startup and share
    the resulting :py:class:`Configuration` instead.

    :param AccessorCompiler accessor_compiler: The compiler for the selectors.
                                               Defaults to :py:class:`DefaultAccessorCompiler`.
    """

    accessor_compiler: AccessorCompiler
    conventions: ConventionChain
    _configurations: typing.Dict[type, ResourceConfiguration]

    @property
    def resource_configurations_by_type(self) -> typing.Mapping[type, ResourceConfiguration]:
        return types.MappingProxyType(self._configurations)

    def resource(self, representation_type: typing.Type[T]) -> ResourceConfiguration[T]:
        """
        Returns the :py:class:`ResourceConfiguration` for the representation type,
        creating it on the first call.
        """
        if not isinstance(representation_type, type):
            raise TypeError(f"{representation_type!r} is not a class")
        configuration = self._configurations.get(representation_type)
        if configuration is None:
            configuration = ResourceConfiguration(
                representation_type, self.accessor_compiler, self.conventions
            )
            self._configurations[representation_type] = configuration
        return configuration

    def with_convention(self, convention: Convention) -> "ConfigurationBuilder":
        """
        Registers a convention.  Conventions registered later take precedence over the
        earlier ones implementing the same contract.
        """
        self.conventions.add(convention)
        return self

    def build(self) -> Configuration:
        """
        Resolves and links the declarations into a new :py:class:`Configuration`.

        :raises UnresolvedRelationshipError: if a relationship target cannot be mapped.
        :raises InvalidDeclarationError: if the declarations are inconsistent.
        """
        linker = GraphLinker(self._configurations, self.accessor_compiler, self.conventions)
        configuration = linker()
        for auto_registered in linker.auto_registered:
            self._configurations.setdefault(auto_registered.representation_type, auto_registered)
        logger.debug("built configuration with %d mapping(s)", len(configuration))
        return configuration

    def __init__(self, accessor_compiler: typing.Optional[AccessorCompiler] = None):
        self.accessor_compiler = (
            accessor_compiler if accessor_compiler is not None else DefaultAccessorCompiler()
        )
        self.conventions = ConventionChain()
        self._configurations = OrderedDict()
