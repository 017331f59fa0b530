from .core import SQLAAccessorCompiler, SQLAMemberDescriptor  # noqa
from .defaults import (  # noqa
    SQLALinkIdConvention,
    SQLAPropertyScanningConvention,
    TableNameResourceTypeConvention,
    builder_with_defaults,
)
