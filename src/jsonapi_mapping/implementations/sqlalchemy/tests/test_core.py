import pytest

from ....accessors import PlainMemberDescriptor
from ....exceptions import InvalidAccessorError
from ..core import SQLAAccessorCompiler, SQLAMemberDescriptor, mapper_for
from .testing import Author, Note, Post, Tag


@pytest.fixture
def compiler() -> SQLAAccessorCompiler:
    return SQLAAccessorCompiler()


def test_mapper_for():
    assert mapper_for(Post) is not None
    assert mapper_for(Post).class_ is Post
    assert mapper_for(Note) is None


class TestSQLAAccessorCompiler:
    @pytest.mark.parametrize(
        "selector",
        [Post.title, "title", lambda p: p.title],
    )
    def test_compile(self, compiler, selector):
        member = compiler.compile(Post, selector)
        assert isinstance(member, SQLAMemberDescriptor)
        assert member.name == "title"
        assert member.owner is Post
        assert member.writable
        assert member.annotation is str

        post = Post(id=1, title="foo")
        assert member.get(post) == "foo"
        member.set(post, "bar")
        assert post.title == "bar"

    def test_compile_foreign_attribute(self, compiler):
        with pytest.raises(InvalidAccessorError):
            compiler.compile(Post, Author.name)

    def test_compile_nested(self, compiler):
        with pytest.raises(InvalidAccessorError):
            compiler.compile(Post, lambda p: p.author.name)

    def test_compile_unmapped_member(self, compiler):
        member = compiler.compile(Post, lambda p: p.display_title)
        assert isinstance(member, PlainMemberDescriptor)
        assert not member.writable
        assert member.get(Post(id=1, title="foo")) == "FOO"

    def test_compile_unmapped_class(self, compiler):
        member = compiler.compile(Note, lambda n: n.tags)
        assert isinstance(member, PlainMemberDescriptor)
        assert member.shape() == (True, Tag)

    def test_compile_getter(self, compiler):
        post = Post(id=1, title="foo", author_id=4)
        assert compiler.compile_getter(Post, Post.author_id)(post) == 4
        assert compiler.compile_getter(Post, "author_id")(post) == 4

    def test_shape(self, compiler):
        assert compiler.compile(Post, Post.author).shape() == (False, Author)
        assert compiler.compile(Author, Author.posts).shape() == (True, Post)
        assert compiler.compile(Post, Post.tags).shape() == (True, Tag)
        assert compiler.compile(Post, Post.author_id).shape() == (False, int)

    def test_alien_column(self, compiler):
        member = compiler.compile(Post, "author_name")
        assert member.is_alien
        assert not member.writable
        assert member.annotation is None
        assert not compiler.compile(Post, "author_id").is_alien

    def test_members(self, compiler):
        assert {m.name for m in compiler.members(Post)} == {
            "id",
            "title",
            "author_id",
            "author_name",
            "author",
            "tags",
        }
        assert [m.name for m in compiler.members(Note)] == ["id", "text", "tags"]
