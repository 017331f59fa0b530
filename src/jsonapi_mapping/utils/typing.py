import collections.abc
import sys
import types
import typing

T = typing.TypeVar("T")


def assert_not_none(value: typing.Optional[T]) -> T:
    assert value is not None
    return value


COLLECTION_ORIGINS: typing.FrozenSet[typing.Any] = frozenset(
    [
        list,
        tuple,
        set,
        frozenset,
        collections.abc.Collection,
        collections.abc.Iterable,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
    ]
)


def evaluate_annotation(scope: type, annotation: typing.Any) -> typing.Any:
    """
    Resolves the forward references (strings and :py:class:`typing.ForwardRef`, nested
    ones included) in an annotation declared by ``scope``.  Names are looked up in the
    namespace of ``scope`` and then in the module that defines it.

    :raises NameError: when the annotation refers to a name that does not exist (yet).
    """
    module = sys.modules.get(scope.__module__)
    globalns = dict(vars(module)) if module is not None else {}

    def _() -> None:
        ...  # pragma: nocover

    _.__annotations__ = {"return": annotation}
    return typing.get_type_hints(_, globalns=globalns, localns=dict(vars(scope)))["return"]


def unwrap_optional(hint: typing.Any) -> typing.Any:
    if typing.get_origin(hint) in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def analyze_shape(scope: type, annotation: typing.Any) -> typing.Tuple[bool, typing.Any]:
    """
    Infers whether the annotation denotes a collection, and the type of the items
    (or of the value itself for non-collections).

    :return: a tuple of the collection flag and the element type, which is
             :py:const:`None` when indeterminable.
    """
    hint = unwrap_optional(evaluate_annotation(scope, annotation))
    origin = typing.get_origin(hint)
    if origin is None:
        if hint in (str, bytes):
            return False, hint
        if isinstance(hint, type) and hint in COLLECTION_ORIGINS:
            return True, None
        return False, hint
    if origin in COLLECTION_ORIGINS:
        args = [a for a in typing.get_args(hint) if a is not Ellipsis]
        if not args:
            return True, None
        return True, unwrap_optional(args[0])
    return False, origin


if sys.version_info >= (3, 14):
    import annotationlib

    def own_annotations(obj: typing.Any) -> typing.Mapping[str, typing.Any]:
        """
        Returns the annotations defined directly on ``obj`` without evaluating them;
        names that cannot be resolved are kept as forward references.
        """
        return annotationlib.get_annotations(obj, format=annotationlib.Format.FORWARDREF)

else:
    import inspect

    def own_annotations(obj: typing.Any) -> typing.Mapping[str, typing.Any]:
        """
        Returns the annotations defined directly on ``obj`` without evaluating them;
        names that cannot be resolved are kept as forward references.
        """
        return inspect.get_annotations(obj)


def is_class_var(annotation: typing.Any) -> bool:
    if isinstance(annotation, typing.ForwardRef):
        annotation = annotation.__forward_arg__
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar
