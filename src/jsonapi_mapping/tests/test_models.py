import pytest

from ..exceptions import MappingNotFoundError
from ..models import Accessor, Configuration, RelationshipDescriptor, ResourceMapping
from .testing import Author, Post, Tag


class SpecialPost(Post):
    pass


@pytest.fixture
def author_mapping() -> ResourceMapping:
    return ResourceMapping(Author, "authors", id_getter=lambda a: a.id)


@pytest.fixture
def post_mapping() -> ResourceMapping:
    return ResourceMapping(
        Post,
        "posts",
        id_getter=lambda p: p.id,
        attributes=[
            ("title", Accessor(lambda p: p.title, lambda p, v: setattr(p, "title", v))),
            ("authorId", Accessor(lambda p: p.author_id)),
        ],
        relationships=[
            RelationshipDescriptor(
                name="author",
                is_collection=False,
                parent_type=Post,
                related_base_type=Author,
                related_resource=lambda p: p.author,
                related_resource_id=lambda p: p.author_id,
            ),
        ],
    )


class TestResourceMapping:
    def test_attributes(self, post_mapping):
        assert list(post_mapping.attributes) == ["title", "authorId"]
        assert list(post_mapping.property_getters) == ["title", "authorId"]
        assert list(post_mapping.property_setters) == ["title"]
        with pytest.raises(TypeError):
            post_mapping.attributes["body"] = Accessor(lambda p: None)  # type: ignore

    def test_get_relationship(self, post_mapping):
        rel = post_mapping.get_relationship("author")
        assert rel.name == "author"
        assert post_mapping.relationships == (rel,)
        with pytest.raises(KeyError):
            post_mapping.get_relationship("comments")


class TestRelationshipDescriptor:
    def test_link(self, post_mapping, author_mapping):
        rel = post_mapping.get_relationship("author")
        with pytest.raises(AssertionError):
            rel.resource_mapping
        rel._link(author_mapping)
        assert rel.resource_mapping is author_mapping
        assert rel.related_resource_type == "authors"
        with pytest.raises(AssertionError):
            rel._link(author_mapping)

    def test_collection_has_no_id_getter(self):
        rel = RelationshipDescriptor(
            name="posts",
            is_collection=True,
            parent_type=Author,
            related_base_type=Post,
            related_resource=lambda a: a.posts,
            related_resource_id=lambda a: [p.id for p in a.posts],
        )
        assert rel.related_resource_id is None


class TestConfiguration:
    @pytest.fixture
    def config(self, post_mapping, author_mapping) -> Configuration:
        return Configuration([post_mapping, author_mapping])

    def test_get_mapping(self, config, post_mapping):
        assert config.get_mapping(Post) is post_mapping
        assert config.is_mapping_registered(Post)
        assert not config.is_mapping_registered(SpecialPost)
        with pytest.raises(MappingNotFoundError) as e:
            config.get_mapping(SpecialPost)
        assert "SpecialPost" in str(e.value)

    def test_find_mapping(self, config, post_mapping):
        assert config.find_mapping(SpecialPost) is post_mapping
        with pytest.raises(MappingNotFoundError):
            config.find_mapping(Tag)

    def test_get_mapping_by_resource_type(self, config, author_mapping):
        assert config.get_mapping_by_resource_type("authors") is author_mapping
        with pytest.raises(MappingNotFoundError) as e:
            config.get_mapping_by_resource_type("tags")
        assert e.value.key == "tags"
        assert '"tags"' in e.value.message

    def test_resource_type_collision(self, post_mapping):
        other = ResourceMapping(Tag, "posts")
        config = Configuration([post_mapping, other])
        assert config.get_mapping_by_resource_type("posts") is post_mapping
        assert config.get_mapping(Tag) is other

    def test_container(self, config, post_mapping, author_mapping):
        assert len(config) == 2
        assert list(config) == [post_mapping, author_mapping]
        assert Author in config
        assert Tag not in config
        with pytest.raises(TypeError):
            config.mappings[Tag] = None  # type: ignore
