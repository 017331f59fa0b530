import typing

import pytest

from ..utils import analyze_shape, evaluate_annotation, is_class_var, unwrap_optional
from .testing import Author, Comment, Gadget, Post
from .testing_base import OwnedItem, Owner


def test_evaluate_annotation():
    assert evaluate_annotation(Post, "Author") is Author
    assert evaluate_annotation(Post, typing.ForwardRef("Comment")) is Comment
    assert evaluate_annotation(Post, int) is int
    with pytest.raises(NameError):
        evaluate_annotation(Post, "NoSuchClass")


def test_evaluate_annotation_nested():
    assert evaluate_annotation(Post, typing.List["Comment"]) == typing.List[Comment]
    assert evaluate_annotation(Post, "typing.Optional[Author]") == typing.Optional[Author]


def test_evaluate_annotation_scope():
    assert evaluate_annotation(OwnedItem, "Owner") is Owner
    with pytest.raises(NameError):
        evaluate_annotation(Gadget, "Owner")


def test_unwrap_optional():
    assert unwrap_optional(typing.Optional[int]) is int
    assert unwrap_optional(int | None) is int
    assert unwrap_optional(typing.Union[int, str]) == typing.Union[int, str]
    assert unwrap_optional(str) is str


@pytest.mark.parametrize(
    "annotation, expected",
    [
        (int, (False, int)),
        (str, (False, str)),
        ("Author", (False, Author)),
        (typing.Optional["Author"], (False, Author)),
        ("typing.Optional[Author]", (False, Author)),
        (typing.List["Post"], (True, Post)),
        ("list[Post]", (True, Post)),
        (typing.Sequence[typing.Optional[Comment]], (True, Comment)),
        (typing.Tuple[Comment, ...], (True, Comment)),
        (typing.Optional[typing.Set[Author]], (True, Author)),
        (list, (True, None)),
        (typing.Dict[str, Author], (False, dict)),
    ],
)
def test_analyze_shape(annotation, expected):
    assert analyze_shape(Post, annotation) == expected


def test_is_class_var():
    assert is_class_var(typing.ClassVar[int])
    assert is_class_var("typing.ClassVar[int]")
    assert not is_class_var(int)
    assert not is_class_var("Author")
