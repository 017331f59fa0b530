from .builder import ConfigurationBuilder  # noqa
from .declarative import ResourceConfiguration  # noqa
from .defaults import (  # noqa
    CamelCaseLinkNameConvention,
    DefaultPropertyScanningConvention,
    PluralizedCamelCaseTypeConvention,
    SimpleLinkedIdConvention,
    builder_with_defaults,
)
from .exceptions import (  # noqa
    InvalidAccessorError,
    InvalidDeclarationError,
    JSONAPIMappingException,
    MappingNotFoundError,
    UnresolvedRelationshipError,
)
from .interfaces import (  # noqa
    AccessorCompiler,
    LinkIdConvention,
    LinkNameConvention,
    MemberDescriptor,
    PropertyScanningConvention,
    ResourceTypeConvention,
)
from .models import (  # noqa
    Accessor,
    Configuration,
    InclusionRule,
    RelationshipDescriptor,
    ResourceMapping,
)
