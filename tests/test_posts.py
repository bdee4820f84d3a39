"""Front matter, body selection and destination paths."""
import pathlib
from datetime import datetime, timezone

import pytest
import yaml

from ghost2hugo.cards import CARD_TYPES, CardType
from ghost2hugo.export import PostRecord
from ghost2hugo.posts import (
    export_post,
    front_matter,
    post_body,
    post_path,
    render_mobiledoc,
    render_post,
)

PUBLISHED = datetime(2017, 8, 2, 17, 53, tzinfo=timezone.utc)
CREATED = datetime(2017, 8, 1, 10, tzinfo=timezone.utc)


def make_post(**kwargs):
    defaults = dict(
        id=1,
        title="Hello",
        slug="hello",
        status="published",
        meta_description="First post",
        published=PUBLISHED,
        created=CREATED,
        populated=True,
    )
    defaults.update(kwargs)
    return PostRecord(**defaults)


class TestFrontMatter:
    def test_minimal_post(self):
        assert front_matter(make_post()) == {
            "date": PUBLISHED,
            "title": "Hello",
            "draft": False,
            "slug": "hello",
            "description": "First post",
        }

    def test_key_order(self):
        post = make_post(image="/content/a.png", tags=["go"], author="Ada")
        assert list(front_matter(post)) == [
            "date", "title", "draft", "slug", "description",
            "image", "tags", "categories", "author",
        ]

    def test_draft_uses_created(self):
        assert front_matter(make_post(is_draft=True))["date"] == CREATED

    def test_unset_date_omitted(self):
        assert "date" not in front_matter(make_post(published=None))

    def test_image_beats_feature_image(self):
        post = make_post(image="/content/images/a.png", feature_image="/content/images/b.png")
        assert front_matter(post)["image"] == "/images/a.png"

    def test_feature_image_fallback(self):
        post = make_post(feature_image="https://cdn.example.com/b.png")
        assert front_matter(post)["image"] == "https://cdn.example.com/b.png"

    def test_tags_and_categories_match(self):
        fm = front_matter(make_post(tags=["python", "golang"]))
        assert fm["tags"] == ["python", "golang"]
        assert fm["categories"] == fm["tags"]

    def test_empty_values_omitted(self):
        fm = front_matter(make_post(tags=[], author="", image="", feature_image=""))
        for key in ("tags", "categories", "author", "image"):
            assert key not in fm


class TestPath:
    def test_page(self):
        post = make_post(slug="about", is_page=True)
        assert post_path(post, pathlib.Path("site/content")) == pathlib.Path("site/content/about.md")

    def test_post(self):
        post = make_post(slug="hello")
        assert post_path(post, pathlib.Path("site/content")) == pathlib.Path("site/content/post/hello.md")


class TestBody:
    def test_mobiledoc_wins(self, diagnostics, make_mobiledoc):
        doc = make_mobiledoc(cards=[["markdown", {"markdown": "from mobiledoc"}]], sections=[[10, 0]])
        post = make_post(mobiledoc=doc, markdown="from markdown")
        assert post_body(post, diagnostics) == "from mobiledoc\n\n"

    def test_markdown_fallback_verbatim(self, diagnostics):
        post = make_post(markdown="Line one  \r\nLine two")
        assert post_body(post, diagnostics) == "Line one  \r\nLine two"

    def test_render_failure_is_local(self, diagnostics, capsys):
        post = make_post(id=9, mobiledoc="{not json", markdown="fallback")
        assert post_body(post, diagnostics) == ""
        record = diagnostics.of_kind("render")[0]
        assert record.post_id == 9
        assert "ERROR rendering post 9" in capsys.readouterr().err

    def test_unknown_card_skipped_with_diagnostic(self, diagnostics, make_mobiledoc):
        doc = make_mobiledoc(
            cards=[["callout", {}], ["hr", {}]],
            sections=[[10, 0], [10, 1]],
        )
        post = make_post(id=5, mobiledoc=doc)
        assert render_mobiledoc(post, diagnostics) == "\n---\n\n"
        assert diagnostics.of_kind("card")[0].post_id == 5

    def test_card_diagnostic_tagged_with_post(self, diagnostics, make_mobiledoc):
        doc = make_mobiledoc(cards=[["image", {}]], sections=[[10, 0]])
        render_mobiledoc(make_post(id=3, mobiledoc=doc), diagnostics)
        assert [(d.kind, d.post_id) for d in diagnostics.records] == [("card", 3)]

    def test_deeply_nested_json_is_local(self, diagnostics, capsys):
        post = make_post(id=11, mobiledoc="[" * 200000 + "]" * 200000, markdown="x")
        assert post_body(post, diagnostics) == ""
        assert diagnostics.of_kind("render")[0].post_id == 11
        assert "ERROR rendering post 11" in capsys.readouterr().err

    def test_malformed_section_is_local(self, diagnostics, make_mobiledoc):
        # text marker whose value is not a string
        doc = make_mobiledoc(sections=[[1, "p", [[0, [], 0, 42]]]])
        post = make_post(id=12, mobiledoc=doc)
        assert render_mobiledoc(post, diagnostics) == ""
        assert diagnostics.of_kind("render")[0].post_id == 12

    def test_raising_card_renderer_is_local(self, diagnostics, make_mobiledoc, monkeypatch):
        def explode(card):
            raise RuntimeError("boom")

        monkeypatch.setitem(CARD_TYPES, "hr", CardType(lambda name, payload: None, explode))
        doc = make_mobiledoc(cards=[["hr", {}]], sections=[[10, 0]])
        post = make_post(id=13, mobiledoc=doc)
        assert render_mobiledoc(post, diagnostics) == ""
        [record] = diagnostics.of_kind("render")
        assert record.post_id == 13
        assert "boom" in record.message


class TestRenderPost:
    def test_front_matter_then_blank_line_then_body(self, diagnostics):
        post = make_post(markdown="Body", tags=["go"], author="Ada")
        text = render_post(post, diagnostics)
        head, body = text.split("\n---\n\n", 1)
        assert head.startswith("---\n")
        assert body == "Body"
        fm = yaml.safe_load(head[len("---\n"):])
        assert fm["date"] == "2017-08-02T17:53:00+00:00"
        assert fm["tags"] == ["go"]
        assert fm["categories"] == ["go"]
        assert fm["draft"] is False

    def test_no_yaml_aliases_for_shared_tags(self, diagnostics):
        text = render_post(make_post(tags=["go"]), diagnostics)
        assert "&id" not in text
        assert "*id" not in text


class TestExportPost:
    def test_writes_and_skips_unchanged(self, tmp_path, diagnostics, capsys):
        post = make_post(markdown="Body")
        path = export_post(post, tmp_path, diagnostics)
        assert path == tmp_path / "post" / "hello.md"
        assert path.read_text(encoding="utf-8").endswith("Body")
        assert "✓ exported post hello" in capsys.readouterr().out

        export_post(post, tmp_path, diagnostics)
        assert "= hello unchanged, skip" in capsys.readouterr().out

    def test_dry_run_writes_nothing(self, tmp_path, diagnostics):
        path = export_post(make_post(), tmp_path, diagnostics, dry_run=True)
        assert not path.exists()


@pytest.mark.parametrize("is_draft,expected", [(True, CREATED), (False, PUBLISHED)])
def test_date_follows_draft_flag(is_draft, expected):
    assert front_matter(make_post(is_draft=is_draft))["date"] == expected
