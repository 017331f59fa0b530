import typing

import sqlalchemy as sa  # type: ignore
from sqlalchemy import orm  # type: ignore

from ...accessors import DefaultAccessorCompiler
from ...exceptions import InvalidAccessorError
from ...interfaces import Getter, MemberDescriptor


def is_alien_clause(sa_mapper: orm.Mapper, expression: sa.sql.ClauseElement) -> bool:
    if not isinstance(expression, sa.Column):
        return True
    if expression.table is None:
        return True
    return expression.table not in sa_mapper.tables


def mapper_for(class_: type) -> typing.Optional[orm.Mapper]:
    """
    Returns the SQLAlchemy mapper of ``class_``, or None if the class is not mapped.
    """
    return sa.inspect(class_, raiseerr=False)


class SQLAMemberDescriptor(MemberDescriptor):
    """
    Describes a member of a mapped class through its SQLAlchemy ``MapperProperty``.
    """

    _owner: type
    property: orm.interfaces.MapperProperty

    @property
    def name(self) -> str:
        return self.property.key

    @property
    def owner(self) -> type:
        return self._owner

    @property  # TODO: memoizable
    def annotation(self) -> typing.Any:
        if isinstance(self.property, orm.ColumnProperty):
            if not is_alien_clause(self.property.parent, self.property.expression):
                try:
                    return self.property.expression.type.python_type
                except NotImplementedError:
                    return None
        elif isinstance(self.property, orm.CompositeProperty):
            return self.property.composite_class
        elif isinstance(self.property, orm.RelationshipProperty):
            return self.property.mapper.class_
        return None

    @property
    def writable(self) -> bool:
        if isinstance(self.property, orm.ColumnProperty):
            # we cannot perform updates on alien columns
            return not is_alien_clause(self.property.parent, self.property.expression)
        return True

    @property
    def is_alien(self) -> bool:
        return isinstance(self.property, orm.ColumnProperty) and is_alien_clause(
            self.property.parent, self.property.expression
        )

    def get(self, target: typing.Any) -> typing.Any:
        return self.property.class_attribute.__get__(target, None)

    def set(self, target: typing.Any, value: typing.Any) -> None:
        self.property.class_attribute.__set__(target, value)

    def shape(self) -> typing.Tuple[bool, typing.Optional[type]]:
        if isinstance(self.property, orm.RelationshipProperty):
            return bool(self.property.uselist), self.property.mapper.class_
        return False, self.annotation

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._owner.__qualname__}.{self.name})"

    def __init__(self, owner: type, property: orm.interfaces.MapperProperty):
        self._owner = owner
        self.property = property


class SQLAAccessorCompiler(DefaultAccessorCompiler):
    """
    Compiles selectors over SQLAlchemy-mapped classes.  In addition to names and
    lambdas, instrumented attributes (``Post.title``) are accepted as selectors.
    Members that are not mapped properties, as well as the members of unmapped
    classes, are handled as plain Python members.
    """

    def _describe_mapped(self, class_: type, name: str) -> typing.Optional[MemberDescriptor]:
        sa_mapper = mapper_for(class_)
        if sa_mapper is None:
            return None
        prop = sa_mapper.attrs.get(name)
        if prop is None:
            return None
        return SQLAMemberDescriptor(class_, prop)

    def describe(self, class_: type, name: str) -> MemberDescriptor:
        member = self._describe_mapped(class_, name)
        if member is not None:
            return member
        return super().describe(class_, name)

    def compile(self, class_: type, selector: typing.Any) -> MemberDescriptor:
        if isinstance(selector, orm.attributes.QueryableAttribute):
            if not (isinstance(selector.class_, type) and issubclass(class_, selector.class_)):
                raise InvalidAccessorError(class_, f"{selector!r} belongs to {selector.class_!r}")
            return self.describe(class_, selector.key)
        return super().compile(class_, selector)

    def compile_getter(self, class_: type, selector: typing.Any) -> Getter:
        if isinstance(selector, orm.attributes.QueryableAttribute):
            return self.compile(class_, selector).get
        return super().compile_getter(class_, selector)

    def members(self, class_: type) -> typing.Sequence[MemberDescriptor]:
        sa_mapper = mapper_for(class_)
        if sa_mapper is None:
            return super().members(class_)
        return [
            SQLAMemberDescriptor(class_, prop)
            for prop in sa_mapper.attrs
            if not prop.key.startswith("_")
        ]
