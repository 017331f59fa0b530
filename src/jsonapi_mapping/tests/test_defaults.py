import pytest

from ..accessors import DefaultAccessorCompiler
from ..defaults import (
    CamelCaseLinkNameConvention,
    DefaultPropertyScanningConvention,
    PluralizedCamelCaseTypeConvention,
    SimpleLinkedIdConvention,
)
from .testing import Address, Author, Comment, Dangling, Opaque, Person, Post


@pytest.fixture
def compiler() -> DefaultAccessorCompiler:
    return DefaultAccessorCompiler()


def test_camel_case_link_name_convention(compiler):
    convention = CamelCaseLinkNameConvention()
    assert convention.get_link_name(compiler.compile(Post, "author")) == "author"
    assert convention.get_link_name(compiler.compile(Person, "full_name")) == "fullName"


@pytest.mark.parametrize(
    "class_, expected",
    [(Post, "posts"), (Author, "authors"), (Address, "addresses"), (Person, "people")],
)
def test_pluralized_camel_case_type_convention(class_, expected):
    assert PluralizedCamelCaseTypeConvention().get_resource_type(class_) == expected


class TestSimpleLinkedIdConvention:
    def test_sibling(self, compiler):
        convention = SimpleLinkedIdConvention()
        assert convention.get_id_selector(compiler.compile(Post, "author")) == "author_id"

    def test_no_sibling(self, compiler):
        convention = SimpleLinkedIdConvention()
        assert convention.get_id_selector(compiler.compile(Person, "address")) is None

    def test_collection(self, compiler):
        convention = SimpleLinkedIdConvention()
        assert convention.get_id_selector(compiler.compile(Post, "comments")) is None


class TestDefaultPropertyScanningConvention:
    @pytest.fixture
    def convention(self) -> DefaultPropertyScanningConvention:
        return DefaultPropertyScanningConvention()

    def test_is_primary_id(self, compiler, convention):
        assert convention.is_primary_id(compiler.compile(Post, "id"))
        assert not convention.is_primary_id(compiler.compile(Post, "author_id"))
        assert DefaultPropertyScanningConvention(id_name="title").is_primary_id(
            compiler.compile(Post, "title")
        )

    @pytest.mark.parametrize(
        "class_, name, expected",
        [
            (Post, "id", False),
            (Post, "title", False),
            (Post, "author_id", False),
            (Post, "author", True),
            (Post, "comments", True),
            (Author, "posts", True),
            (Comment, "posted_at", False),
            (Person, "address", True),
            (Person, "nickname", False),
            (Dangling, "target", True),
            (Opaque, "blob", False),
        ],
    )
    def test_is_linked_resource(self, compiler, convention, class_, name, expected):
        assert convention.is_linked_resource(compiler.compile(class_, name)) is expected

    def test_should_ignore(self, compiler):
        convention = DefaultPropertyScanningConvention(ignored=["title"])
        assert convention.should_ignore(compiler.compile(Post, "title"))
        assert not convention.should_ignore(compiler.compile(Post, "id"))

    def test_get_property_name(self, compiler, convention):
        assert convention.get_property_name(compiler.compile(Post, "author_id")) == "authorId"

    def test_throw_on_unmapped_linked_type(self):
        assert DefaultPropertyScanningConvention().throw_on_unmapped_linked_type
        assert not DefaultPropertyScanningConvention(
            throw_on_unmapped_linked_type=False
        ).throw_on_unmapped_linked_type


def test_untyped_members_are_attributes():
    class Untyped:
        id = None
        value = 0

    compiler = DefaultAccessorCompiler()
    member = compiler.compile(Untyped, "value")
    assert member.shape() == (False, None)
    assert not DefaultPropertyScanningConvention().is_linked_resource(member)
    assert compiler.members(Untyped) == []
