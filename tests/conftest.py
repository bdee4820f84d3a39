"""
Shared fixtures: a small Ghost export covering every export vintage the
converter has to cope with.
"""
import copy
import json

import pytest

from ghost2hugo.config import Config
from ghost2hugo.diagnostics import Diagnostics
from ghost2hugo.export import GhostExport


def build_mobiledoc(sections, cards=(), atoms=(), markups=(), version="0.3.1"):
    return json.dumps({
        "version": version,
        "markups": list(markups),
        "atoms": list(atoms),
        "cards": list(cards),
        "sections": list(sections),
    })


HELLO_MOBILEDOC = build_mobiledoc(
    sections=[[10, 0]],
    cards=[["card-markdown", {"cardName": "card-markdown", "markdown": "Hello *world*"}]],
)

SAMPLE_EXPORT = {
    "db": [{
        "meta": {"exported_on": 1508000000000, "version": "1.25.0"},
        "data": {
            "posts": [
                {
                    "id": 1,
                    "title": "Hello",
                    "slug": "hello",
                    "mobiledoc": HELLO_MOBILEDOC,
                    "markdown": "not used",
                    "feature_image": "/content/images/hero.png",
                    "page": False,
                    "status": "published",
                    "meta_description": "First post",
                    "author_id": 1,
                    "published_at": "2017-08-02T17:53:00.000Z",
                    "created_at": "2017-08-01T10:00:00.000Z",
                },
                {
                    "id": 2,
                    "title": "About",
                    "slug": "about",
                    "mobiledoc": "",
                    "markdown": "About me",
                    "page": 1,
                    "status": "published",
                    "author_id": 2,
                    "published_at": 1501696380000,
                    "created_at": 1501696380000,
                },
                {
                    "id": 3,
                    "title": "WIP",
                    "slug": "wip",
                    "mobiledoc": None,
                    "markdown": "draft body",
                    "page": "false",
                    "status": "draft",
                    "author_id": "1",
                    "published_at": None,
                    "created_at": "2017-09-01T00:00:00.000Z",
                },
                {
                    "id": 4,
                    "title": "Broken",
                    "slug": "broken",
                    "mobiledoc": "{not json",
                    "page": False,
                    "status": "published",
                    "author_id": 1,
                    "published_at": "2017-10-01T00:00:00.000Z",
                    "created_at": "2017-10-01T00:00:00.000Z",
                },
            ],
            "users": [
                {"id": 1, "name": "Ada"},
                {"id": 2, "name": "Grace"},
                {"id": 1, "name": "Shadowed"},
            ],
            "tags": [
                {"id": 10, "name": "#golang"},
                {"id": 11, "name": "python"},
            ],
            "posts_tags": [
                {"post_id": 1, "tag_id": 11},
                {"post_id": 1, "tag_id": 10},
                {"post_id": 2, "tag_id": 99},
                {"post_id": "1", "tag_id": 10},
            ],
        },
    }],
}


@pytest.fixture
def make_mobiledoc():
    return build_mobiledoc


@pytest.fixture
def raw_export():
    return copy.deepcopy(SAMPLE_EXPORT)


@pytest.fixture
def export(raw_export):
    return GhostExport.from_json(raw_export)


@pytest.fixture
def diagnostics():
    return Diagnostics()


@pytest.fixture
def config():
    return Config()
