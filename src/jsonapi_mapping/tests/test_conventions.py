import pytest

from ..accessors import DefaultAccessorCompiler
from ..conventions import ConventionChain
from ..defaults import DefaultPropertyScanningConvention, PluralizedCamelCaseTypeConvention
from ..interfaces import ResourceTypeConvention
from .testing import FixedLinkIdConvention, FixedLinkNameConvention, FixedTypeConvention, Post


class TestConventionChain:
    def test_empty(self):
        chain = ConventionChain()
        member = DefaultAccessorCompiler().compile(Post, "author")
        assert len(chain) == 0
        assert chain.resource_type_for(Post) is None
        assert chain.link_name_for(member) is None
        assert chain.id_selector_for(member) is None
        assert chain.property_scanning is None

    def test_most_recent_first(self):
        chain = ConventionChain([FixedTypeConvention("first"), FixedTypeConvention("second")])
        assert chain.resource_type_for(Post) == "second"
        chain.add(FixedTypeConvention("third"))
        assert chain.resource_type_for(Post) == "third"

    def test_none_defers_to_earlier(self):
        chain = ConventionChain()
        chain.add(PluralizedCamelCaseTypeConvention())
        chain.add(FixedTypeConvention(None))
        assert chain.resource_type_for(Post) == "posts"

    def test_contracts_are_separate(self):
        member = DefaultAccessorCompiler().compile(Post, "author")
        chain = ConventionChain(
            [
                FixedLinkNameConvention("writer"),
                FixedLinkIdConvention("author_id"),
                FixedTypeConvention("articles"),
            ]
        )
        assert chain.link_name_for(member) == "writer"
        assert chain.id_selector_for(member) == "author_id"
        assert chain.resource_type_for(Post) == "articles"
        assert list(chain.of(ResourceTypeConvention)) == [list(chain)[2]]

    def test_property_scanning_latest_wins(self):
        first = DefaultPropertyScanningConvention()
        second = DefaultPropertyScanningConvention(id_name="key")
        chain = ConventionChain([first, FixedTypeConvention("x"), second])
        assert chain.property_scanning is second

    def test_rejects_non_conventions(self):
        chain = ConventionChain()
        with pytest.raises(TypeError) as e:
            chain.add(object())  # type: ignore
        assert "PropertyScanningConvention" in str(e.value)
        assert len(chain) == 0
