import typing

import sqlalchemy as sa  # type: ignore
from sqlalchemy import orm  # type: ignore

from ...builder import ConfigurationBuilder
from ...defaults import (
    CamelCaseLinkNameConvention,
    DefaultPropertyScanningConvention,
    PluralizedCamelCaseTypeConvention,
    SimpleLinkedIdConvention,
)
from ...interfaces import (
    LinkIdConvention,
    MemberDescriptor,
    ResourceTypeConvention,
    Selector,
)
from ...utils import assert_not_none
from .core import SQLAAccessorCompiler, SQLAMemberDescriptor, mapper_for


def is_foreign_key_column(prop: orm.interfaces.MapperProperty) -> bool:
    return (
        isinstance(prop, orm.ColumnProperty)
        and isinstance(prop.expression, sa.Column)
        and bool(prop.expression.foreign_keys)
    )


class SQLAPropertyScanningConvention(DefaultPropertyScanningConvention):
    """
    Scans mapped classes by their SQLAlchemy properties: the single-column primary key
    is the identifier, relationship properties are related resources, and columns of
    other tables are ignored.  Foreign key columns are ignored as well unless
    ``ignore_foreign_keys`` is False, as they are exposed through the relationships.
    Members of unmapped classes are scanned as
    :py:class:`DefaultPropertyScanningConvention` does.
    """

    ignore_foreign_keys: bool

    def is_primary_id(self, member: MemberDescriptor) -> bool:
        if not isinstance(member, SQLAMemberDescriptor):
            return super().is_primary_id(member)
        if not isinstance(member.property, orm.ColumnProperty):
            return False
        pkey_cols = assert_not_none(mapper_for(member.owner)).primary_key
        return len(pkey_cols) == 1 and any(c is pkey_cols[0] for c in member.property.columns)

    def is_linked_resource(self, member: MemberDescriptor) -> bool:
        if not isinstance(member, SQLAMemberDescriptor):
            return super().is_linked_resource(member)
        return isinstance(member.property, orm.RelationshipProperty)

    def should_ignore(self, member: MemberDescriptor) -> bool:
        if super().should_ignore(member):
            return True
        if not isinstance(member, SQLAMemberDescriptor):
            return False
        if member.is_alien:
            return True
        return (
            self.ignore_foreign_keys
            and not self.is_primary_id(member)
            and is_foreign_key_column(member.property)
        )

    def __init__(
        self,
        ignored: typing.Iterable[str] = (),
        throw_on_unmapped_linked_type: bool = True,
        ignore_foreign_keys: bool = True,
    ):
        super().__init__(
            ignored=ignored, throw_on_unmapped_linked_type=throw_on_unmapped_linked_type
        )
        self.ignore_foreign_keys = ignore_foreign_keys


class TableNameResourceTypeConvention(ResourceTypeConvention):
    """
    Names resources after the table of the mapped class (``__tablename__``.)
    """

    def get_resource_type(self, class_: type) -> typing.Optional[str]:
        tablename = getattr(class_, "__tablename__", None)
        return tablename if isinstance(tablename, str) else None


class SQLALinkIdConvention(LinkIdConvention):
    """
    Reads the identifier of the related object of a many-to-one relationship from the
    local foreign key column, so that the related object need not be loaded.
    """

    def get_id_selector(self, member: MemberDescriptor) -> typing.Optional[Selector]:
        if not isinstance(member, SQLAMemberDescriptor):
            return None
        prop = member.property
        if not isinstance(prop, orm.RelationshipProperty):
            return None
        if prop.direction is not orm.interfaces.MANYTOONE or len(prop.local_columns) != 1:
            return None
        (col,) = prop.local_columns
        try:
            return assert_not_none(mapper_for(member.owner)).get_property_by_column(col).key
        except orm.exc.UnmappedColumnError:
            return None


def builder_with_defaults() -> ConfigurationBuilder:
    """
    Returns a :py:class:`ConfigurationBuilder` set up for SQLAlchemy-mapped classes.
    Resource types are the table names, falling back to pluralized class names for
    unmapped classes.
    """
    return (
        ConfigurationBuilder(SQLAAccessorCompiler())
        .with_convention(SQLAPropertyScanningConvention())
        .with_convention(CamelCaseLinkNameConvention())
        .with_convention(PluralizedCamelCaseTypeConvention())
        .with_convention(TableNameResourceTypeConvention())
        .with_convention(SimpleLinkedIdConvention())
        .with_convention(SQLALinkIdConvention())
    )
