import dataclasses
import operator
import typing
from collections import OrderedDict

from .deferred import Deferred
from .exceptions import InvalidAccessorError
from .interfaces import AccessorCompiler, Getter, MemberDescriptor
from .utils import analyze_shape, is_class_var, own_annotations


class AccessRecorder:
    """
    An :py:class:`AccessRecorder` stands in for an instance while a selector is
    evaluated, and remembers the chain of attribute accesses performed on it.
    """

    __slots__ = ("_path_",)

    _path_: typing.Tuple[str, ...]

    def __getattr__(self, name: str) -> "AccessRecorder":
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return AccessRecorder(self._path_ + (name,))

    def __bool__(self):
        raise TypeError("member accesses cannot be evaluated for truth")

    def __init__(self, path: typing.Tuple[str, ...] = ()):
        object.__setattr__(self, "_path_", path)


def extract_member_name(class_: type, selector: typing.Callable[[typing.Any], typing.Any]) -> str:
    """
    Evaluates ``selector`` against an :py:class:`AccessRecorder` and returns the name
    of the single member it accesses.

    :raises InvalidAccessorError: if the selector does anything but a direct member access.
    """
    try:
        result = selector(AccessRecorder())
    except Exception as e:
        raise InvalidAccessorError(class_, f"{selector!r} is not a member access ({e})") from e
    if not isinstance(result, AccessRecorder) or not result._path_:
        raise InvalidAccessorError(class_, f"{selector!r} does not denote a member")
    if len(result._path_) != 1:
        raise InvalidAccessorError(
            class_, f"{selector!r} is not a direct member access ({'.'.join(result._path_)})"
        )
    return result._path_[0]


class PlainMemberDescriptor(MemberDescriptor):
    _owner: type
    _scope: type
    _name: str
    _annotation: typing.Any
    _writable: bool
    _getter: Getter
    _shape: Deferred[typing.Tuple[bool, typing.Optional[type]]]

    @property
    def name(self) -> str:
        return self._name

    @property
    def owner(self) -> type:
        return self._owner

    @property
    def annotation(self) -> typing.Any:
        return self._annotation

    @property
    def writable(self) -> bool:
        return self._writable

    def get(self, target: typing.Any) -> typing.Any:
        return self._getter(target)

    def set(self, target: typing.Any, value: typing.Any) -> None:
        setattr(target, self._name, value)

    def shape(self) -> typing.Tuple[bool, typing.Optional[type]]:
        return self._shape()

    def _analyze(self) -> typing.Tuple[bool, typing.Optional[type]]:
        if self._annotation is None:
            return False, None
        return analyze_shape(self._scope, self._annotation)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._owner.__qualname__}.{self._name})"

    def __init__(
        self,
        owner: type,
        name: str,
        annotation: typing.Any,
        writable: bool,
        scope: typing.Optional[type] = None,
    ):
        self._owner = owner
        self._scope = scope if scope is not None else owner
        self._name = name
        self._annotation = annotation
        self._writable = writable
        self._getter = operator.attrgetter(name)
        self._shape = Deferred(self._analyze)


def _is_frozen_dataclass(class_: type) -> bool:
    params = getattr(class_, "__dataclass_params__", None)
    return params is not None and params.frozen


def _has_closed_members(class_: type) -> bool:
    """
    Tells if the instance attributes of ``class_`` are all declared on the class,
    that is, if it is a dataclass or its instances have no ``__dict__``.
    """
    return dataclasses.is_dataclass(class_) or class_.__dictoffset__ == 0


def _declaring_class(class_: type, name: str) -> type:
    return next(
        (k for k in class_.__mro__ if k is not object and name in own_annotations(k)), class_
    )


class DefaultAccessorCompiler(AccessorCompiler):
    """
    Compiles selectors over plain classes and dataclasses.  Members are
    the annotated attributes (dataclass fields included) and the properties,
    in declaration order with base classes first.  Other names of plain classes whose
    instances have a ``__dict__`` are taken for attributes assigned in ``__init__``.
    """

    def _scan(self, class_: type) -> typing.Dict[str, PlainMemberDescriptor]:
        members: typing.Dict[str, PlainMemberDescriptor] = OrderedDict()
        frozen = _is_frozen_dataclass(class_)

        # annotations are resolved in the module of the class that declares them
        if dataclasses.is_dataclass(class_):
            for field in dataclasses.fields(class_):
                members[field.name] = PlainMemberDescriptor(
                    class_,
                    field.name,
                    field.type,
                    not frozen,
                    scope=_declaring_class(class_, field.name),
                )
        else:
            for klass in reversed(class_.__mro__):
                if klass is object:
                    continue
                for name, annotation in own_annotations(klass).items():
                    if is_class_var(annotation):
                        continue
                    members[name] = PlainMemberDescriptor(
                        class_, name, annotation, not frozen, scope=klass
                    )

        property_names: typing.List[str] = []
        for klass in reversed(class_.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, property) and name not in property_names:
                    property_names.append(name)

        for name in property_names:
            # the most derived definition is the one in effect
            klass = next(k for k in class_.__mro__ if name in vars(k))
            prop = vars(klass)[name]
            if not isinstance(prop, property):
                continue
            annotation = None
            if prop.fget is not None:
                annotation = own_annotations(prop.fget).get("return")
            members[name] = PlainMemberDescriptor(
                class_, name, annotation, prop.fset is not None, scope=klass
            )

        return members

    def describe(self, class_: type, name: str) -> MemberDescriptor:
        member = self._scan(class_).get(name)
        if member is not None:
            return member
        try:
            value = getattr(class_, name)
        except AttributeError:
            if _has_closed_members(class_):
                raise InvalidAccessorError(class_, f"no such member: {name}")
            # an attribute assigned in __init__ only
            return PlainMemberDescriptor(class_, name, None, True)
        if callable(value):
            raise InvalidAccessorError(class_, f"{name} is not a data member")
        return PlainMemberDescriptor(class_, name, None, not _is_frozen_dataclass(class_))

    def compile(self, class_: type, selector: typing.Any) -> MemberDescriptor:
        if isinstance(selector, MemberDescriptor):
            if not issubclass(class_, selector.owner):
                raise InvalidAccessorError(
                    class_, f"{selector!r} belongs to {selector.owner.__qualname__}"
                )
            return selector
        elif isinstance(selector, str):
            name = selector
        elif callable(selector):
            name = extract_member_name(class_, selector)
        else:
            raise InvalidAccessorError(class_, f"unsupported selector: {selector!r}")
        return self.describe(class_, name)

    def compile_getter(self, class_: type, selector: typing.Any) -> Getter:
        if isinstance(selector, (str, MemberDescriptor)):
            return self.compile(class_, selector).get
        elif callable(selector):
            return selector
        raise InvalidAccessorError(class_, f"unsupported selector: {selector!r}")

    def members(self, class_: type) -> typing.Sequence[MemberDescriptor]:
        return [m for name, m in self._scan(class_).items() if not name.startswith("_")]


def has_member(class_: type, name: str) -> bool:
    """
    Tells if ``class_`` has an annotated attribute, a dataclass field or a class
    attribute named ``name``.
    """
    if hasattr(class_, name):
        return True
    if dataclasses.is_dataclass(class_) and name in {f.name for f in dataclasses.fields(class_)}:
        return True
    return any(name in own_annotations(klass) for klass in class_.__mro__ if klass is not object)
