# backend/tests/test_projects_service.py

from typing import Any, Dict, List, Optional

from project_feed.notion.client import NotionAuthError
from project_feed.notion.config import NotionConfig
from project_feed.notion.schemas import NotionPage
from project_feed.projects.schemas import FetchOutcome
from project_feed.projects.service import (
    PUBLISHED_FILTER,
    YEAR_DESCENDING_SORTS,
    ProjectFeedService,
    fetch_all_posts,
    get_project_year,
    get_public_link,
    get_tags,
    get_thumbnail_url,
    get_title,
)


def _raw_page(
    page_id: str = "page-1",
    *,
    properties: Optional[Dict[str, Any]] = None,
    public_url: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "object": "page",
        "id": page_id,
        "url": f"https://www.notion.so/{page_id}",
        "public_url": public_url,
        "properties": properties or {},
    }


def _demo_properties() -> Dict[str, Any]:
    return {
        "Title": {"type": "title", "title": [{"plain_text": "Demo"}]},
        "Thumbnail": {
            "type": "files",
            "files": [{"type": "external", "name": "y.png", "external": {"url": "https://x/y.png"}}],
        },
        "Tags": {"type": "multi_select", "multi_select": [{"name": "ui"}, {"name": "web"}]},
        "Year": {"type": "number", "number": 2023},
        "Published": {"type": "checkbox", "checkbox": True},
    }


class FakeNotionClient:
    """query_database の呼び出しを記録し、用意したレスポンスを順番に返す。"""

    def __init__(self, responses: List[Dict[str, Any]]) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    def query_database(self, *, filter=None, sorts=None, start_cursor=None):
        self.calls.append({"filter": filter, "sorts": sorts, "start_cursor": start_cursor})
        return self._responses.pop(0)


class RaisingNotionClient:
    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    def query_database(self, **kwargs):
        raise self._exc


def _single_page_response(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"results": results, "has_more": False, "next_cursor": None}


def test_extractors_on_complete_page():
    page = NotionPage.from_api(
        _raw_page(properties=_demo_properties(), public_url="https://notion.so/abc")
    )

    assert get_title(page) == "Demo"
    assert get_thumbnail_url(page) == "https://x/y.png"
    assert get_tags(page) == ["ui", "web"]
    assert get_project_year(page) == 2023
    assert get_public_link(page) == "https://notion.so/abc"


def test_extractors_default_on_empty_page():
    page = NotionPage.from_api(_raw_page())

    assert get_title(page) == ""
    assert get_thumbnail_url(page) == ""
    assert get_tags(page) == []
    assert get_project_year(page) is None
    assert get_public_link(page) == ""


def test_title_without_segments_is_empty():
    page = NotionPage.from_api(
        _raw_page(properties={"Title": {"type": "title", "title": []}})
    )

    assert get_title(page) == ""


def test_thumbnail_uses_hosted_file_url():
    page = NotionPage.from_api(
        _raw_page(
            properties={
                "Thumbnail": {
                    "type": "files",
                    "files": [
                        {"type": "file", "name": "a.png", "file": {"url": "https://s3/a.png"}},
                        {"type": "external", "name": "b.png", "external": {"url": "https://x/b.png"}},
                    ],
                }
            }
        )
    )

    assert get_thumbnail_url(page) == "https://s3/a.png"


def test_thumbnail_with_no_files_is_empty():
    page = NotionPage.from_api(
        _raw_page(properties={"Thumbnail": {"type": "files", "files": []}})
    )

    assert get_thumbnail_url(page) == ""


def test_project_year_zero_null_or_wrong_kind_is_none():
    for year in (
        {"type": "number", "number": 0},
        {"type": "number", "number": None},
        {"type": "checkbox", "checkbox": True},
        {"type": "rich_text", "rich_text": [{"plain_text": "2023"}]},
    ):
        page = NotionPage.from_api(_raw_page(properties={"Year": year}))
        assert get_project_year(page) is None


def test_tags_wrong_kind_is_empty():
    page = NotionPage.from_api(
        _raw_page(properties={"Tags": {"type": "select", "select": {"name": "ui"}}})
    )

    assert get_tags(page) == []


def test_fetch_all_posts_demo_scenario():
    client = FakeNotionClient(
        [
            _single_page_response(
                [_raw_page("abc-id", properties=_demo_properties(), public_url="https://notion.so/abc")]
            )
        ]
    )
    service = ProjectFeedService(client=client)

    result = service.fetch_all_posts()

    assert result.outcome == FetchOutcome.OK
    assert [e.model_dump(exclude_none=True) for e in result.entries] == [
        {
            "id": "abc-id",
            "title": "Demo",
            "thumbnail": "https://x/y.png",
            "projectYear": 2023,
            "tags": ["ui", "web"],
            "publicLink": "https://notion.so/abc",
        }
    ]
    assert client.calls == [
        {"filter": PUBLISHED_FILTER, "sorts": YEAR_DESCENDING_SORTS, "start_cursor": None}
    ]


def test_fetch_all_posts_empty_database():
    service = ProjectFeedService(client=FakeNotionClient([_single_page_response([])]))

    result = service.fetch_all_posts()

    assert result.ok
    assert result.entries == []


def test_fetch_all_posts_checkbox_year_is_omitted():
    properties = _demo_properties()
    properties["Year"] = {"type": "checkbox", "checkbox": False}
    service = ProjectFeedService(
        client=FakeNotionClient([_single_page_response([_raw_page(properties=properties)])])
    )

    result = service.fetch_all_posts()

    assert "projectYear" not in result.entries[0].model_dump(exclude_none=True)


def test_fetch_all_posts_follows_cursor_across_pages():
    client = FakeNotionClient(
        [
            {"results": [_raw_page("p1"), _raw_page("p2")], "has_more": True, "next_cursor": "c2"},
            {"results": [_raw_page("p3")], "has_more": True, "next_cursor": "c3"},
            {"results": [_raw_page("p4")], "has_more": False, "next_cursor": None},
        ]
    )
    service = ProjectFeedService(client=client)

    result = service.fetch_all_posts()

    assert [e.id for e in result.entries] == ["p1", "p2", "p3", "p4"]
    assert [c["start_cursor"] for c in client.calls] == [None, "c2", "c3"]


def test_fetch_all_posts_stops_when_cursor_missing():
    client = FakeNotionClient(
        [{"results": [_raw_page("p1")], "has_more": True, "next_cursor": None}]
    )
    service = ProjectFeedService(client=client)

    result = service.fetch_all_posts()

    assert [e.id for e in result.entries] == ["p1"]
    assert len(client.calls) == 1


def test_fetch_all_posts_skips_partial_pages():
    client = FakeNotionClient(
        [_single_page_response([{"object": "page", "id": "partial"}, _raw_page("full")])]
    )
    service = ProjectFeedService(client=client)

    result = service.fetch_all_posts()

    assert [e.id for e in result.entries] == ["full"]


def test_fetch_all_posts_is_idempotent():
    response = _single_page_response(
        [_raw_page("p1", properties=_demo_properties()), _raw_page("p2")]
    )
    service = ProjectFeedService(client=FakeNotionClient([response, response]))

    first = service.fetch_all_posts()
    second = service.fetch_all_posts()

    assert first == second


def test_fetch_all_posts_api_error():
    service = ProjectFeedService(client=RaisingNotionClient(NotionAuthError("Unauthorized.")))

    result = service.fetch_all_posts()

    assert result.outcome == FetchOutcome.API_ERROR
    assert result.entries == []
    assert result.error == "Unauthorized."


def test_fetch_all_posts_unexpected_error():
    service = ProjectFeedService(client=RaisingNotionClient(KeyError("results")))

    result = service.fetch_all_posts()

    assert result.outcome == FetchOutcome.UNEXPECTED_ERROR
    assert result.entries == []


def test_module_level_fetch_all_posts_uses_given_client():
    config = NotionConfig(token="dummy-token", database_id="dummy-db")
    client = FakeNotionClient([_single_page_response([_raw_page("p1")])])

    result = fetch_all_posts(config, client=client)

    assert [e.id for e in result.entries] == ["p1"]
