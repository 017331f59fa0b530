import dataclasses
import typing

import sqlalchemy as sa  # type: ignore
from sqlalchemy import orm  # type: ignore

Base = orm.declarative_base()


class Author(Base):
    __tablename__ = "authors"

    id = sa.Column(sa.Integer(), primary_key=True)
    name = sa.Column(sa.String(), nullable=False)
    posts = orm.relationship("Post", back_populates="author")


post_tags = sa.Table(
    "post_tags",
    Base.metadata,
    sa.Column("post_id", sa.Integer(), sa.ForeignKey("posts.id"), primary_key=True),
    sa.Column("tag_id", sa.Integer(), sa.ForeignKey("tags.id"), primary_key=True),
)


class Post(Base):
    __tablename__ = "posts"

    id = sa.Column(sa.Integer(), primary_key=True)
    title = sa.Column(sa.String(), nullable=False)
    author_id = sa.Column(sa.Integer(), sa.ForeignKey("authors.id"), nullable=True)
    author_name = orm.column_property(
        sa.select(Author.name).where(Author.id == author_id).scalar_subquery()
    )
    author = orm.relationship(Author, back_populates="posts")
    tags = orm.relationship("Tag", secondary=post_tags)

    @property
    def display_title(self) -> str:
        return self.title.upper()


class Tag(Base):
    __tablename__ = "tags"

    id = sa.Column(sa.Integer(), primary_key=True)
    label = sa.Column(sa.String(), nullable=False)


@dataclasses.dataclass
class Note:
    id: int
    text: str
    tags: typing.List[Tag] = dataclasses.field(default_factory=list)
