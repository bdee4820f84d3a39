from __future__ import annotations

from typing import Any, Iterable, List

from .export import PostTag, Tag, User


def same_id(a: Any, b: Any) -> bool:
    """
    Raw identity of two exported ids. Ghost has written ids as numbers in
    some versions and as strings in others, so `1` and `"1"` are kept
    apart, and bool never matches int.
    """
    if a is None or b is None:
        return False
    return type(a) is type(b) and a == b


def find_author(author_id: Any, users: Iterable[User]) -> str:
    for user in users:
        if same_id(user.id, author_id):
            return user.name
    return ""


def find_tags(
    post_id: Any,
    tags: List[Tag],
    posts_tags: Iterable[PostTag],
) -> List[str]:
    # Duplicate links are kept on purpose; see DESIGN.md.
    names: List[str] = []
    for link in posts_tags:
        if not same_id(link.post_id, post_id):
            continue
        for tag in tags:
            if same_id(tag.id, link.tag_id):
                names.append(tag.name[1:] if tag.name.startswith("#") else tag.name)
                break
    return names
