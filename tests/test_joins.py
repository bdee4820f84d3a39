"""Author and tag reconstruction from the flat export tables."""
import pytest

from ghost2hugo.export import PostTag, Tag, User
from ghost2hugo.joins import find_author, find_tags, same_id


@pytest.mark.parametrize("a,b,expected", [
    (1, 1, True),
    ("5951f5fca366002ebd5dbef7", "5951f5fca366002ebd5dbef7", True),
    (1, "1", False),
    (True, 1, False),
    (1, 2, False),
    (None, None, False),
    (None, 1, False),
])
def test_same_id(a, b, expected):
    assert same_id(a, b) is expected


def test_first_matching_user_wins():
    users = [User(1, "Ada"), User(1, "Shadowed")]
    assert find_author(1, users) == "Ada"


def test_no_author_is_empty():
    assert find_author(3, [User(1, "Ada")]) == ""
    assert find_author(None, [User(None, "Nobody")]) == ""


def test_tags_follow_link_order_and_drop_sigil():
    tags = [Tag(10, "#golang"), Tag(11, "python")]
    links = [PostTag(1, 11), PostTag(2, 11), PostTag(1, 10)]
    assert find_tags(1, tags, links) == ["python", "golang"]


def test_only_leading_sigil_stripped():
    tags = [Tag(1, "##twice"), Tag(2, "c#")]
    assert find_tags(1, tags, [PostTag(1, 1), PostTag(1, 2)]) == ["#twice", "c#"]


def test_duplicate_links_kept():
    tags = [Tag(10, "golang")]
    assert find_tags(1, tags, [PostTag(1, 10), PostTag(1, 10)]) == ["golang", "golang"]


def test_dangling_link_ignored():
    assert find_tags(1, [Tag(10, "golang")], [PostTag(1, 99)]) == []


def test_string_and_number_ids_do_not_mix():
    tags = [Tag("10", "string-id"), Tag(10, "number-id")]
    assert find_tags(1, tags, [PostTag(1, 10), PostTag("1", "10")]) == ["number-id"]
