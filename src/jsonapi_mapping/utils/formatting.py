import re
import typing


def english_enumerate(items: typing.Iterable[str], conj: str = ", and ") -> str:
    buf = []

    i = iter(items)
    try:
        x = next(i)
    except StopIteration:
        return ""
    buf.append(x)

    lx: typing.Optional[str] = None

    for x in i:
        if lx is not None:
            buf.append(", ")
            buf.append(lx)
        lx = x
    if lx is not None:
        buf.append(conj)
        buf.append(lx)
    return "".join(buf)


_word_boundary_re = re.compile(r"_+|(?<=[a-z0-9])(?=[A-Z])")


def camelize(name: str) -> str:
    """
    Turns ``snake_case`` and ``PascalCase`` names into ``camelCase``.

    >>> camelize("author_id")
    'authorId'
    >>> camelize("BlogPost")
    'blogPost'
    """
    words = [w for w in _word_boundary_re.split(name) if w]
    if not words:
        return name
    return words[0].lower() + "".join(w[:1].upper() + w[1:] for w in words[1:])


_irregular_plurals = {
    "child": "children",
    "person": "people",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "goose": "geese",
    "foot": "feet",
    "tooth": "teeth",
}

_uncountables = frozenset(
    ["data", "equipment", "information", "metadata", "news", "series", "sheep", "species"]
)


def pluralize(word: str) -> str:
    """
    Pluralizes the last word of an English identifier.  Only the common
    suffix rules are covered.
    """
    m = re.match(r"(.*?)([A-Za-z][a-z]*)$", word)
    if m is None:
        return word
    head, last = m.groups()
    lower = last.lower()
    if lower in _uncountables:
        return word
    if lower in _irregular_plurals:
        plural = _irregular_plurals[lower]
        return head + (plural[0].upper() + plural[1:] if last[0].isupper() else plural)
    if re.search(r"(s|x|z|ch|sh)$", lower):
        return word + "es"
    if re.search(r"[^aeiou]y$", lower):
        return word[:-1] + "ies"
    return word + "s"
