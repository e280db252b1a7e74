"""HLTBClient の結合テスト（HTTP はモック）."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

from hltb.client import HLTBClient
from hltb.constants import GameSortBy, Modifier, QueryType
from hltb.errors import PageNotFoundError, RetrievalError, TransportError
from hltb.models import HLTBQuery
from hltb.transport import make_transport_config

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _load_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def _client(pages: dict[int, str] | None = None, status_code: int = 200, html: str = ""):
    """ページ番号ごとに返す HTML を決めたモックセッション付きのクライアント."""
    session = MagicMock(spec=requests.Session)

    def _post(url, params=None, data=None, headers=None, timeout=None):
        body = pages[params["page"]] if pages is not None else html
        return MagicMock(status_code=status_code, text=body)

    session.post.side_effect = _post
    return HLTBClient(make_transport_config("http://hltb.test", session=session)), session


class TestSearchGames:
    """ゲーム検索のテスト."""

    def test_basic(self):
        client, session = _client(html=_load_fixture("games/basic_response.html"))
        page = client.search_games("pokemon red")

        assert len(page.records) == 2
        assert page.records[0].title == "Pokemon Red and Blue"
        assert page.total_matches == 2
        assert page.total_pages == 1
        assert page.current_page == 1
        assert not page.has_next()

        form = session.post.call_args.kwargs["data"]
        assert form["queryString"] == "pokemon red"
        assert form["t"] == "games"
        assert form["sorthead"] == "name"

    def test_random(self):
        client, session = _client(html=_load_fixture("games/basic_response.html"))
        page = client.search_games_by_query(HLTBQuery(query="pokemon red", random=True))

        assert len(page.records) == 2
        assert session.post.call_args.kwargs["data"]["randomize"] == "1"

    def test_query_type_forced(self):
        client, session = _client(html=_load_fixture("games/basic_response.html"))
        client.search_games_by_query(HLTBQuery(query_type=QueryType.USERS))

        assert session.post.call_args.kwargs["data"]["t"] == "games"

    def test_user_stats(self):
        client, _ = _client(html=_load_fixture("games/userstats.html"))
        page = client.search_games_by_query(HLTBQuery(page=2, modifier=Modifier.USER_STATS))

        assert len(page.records) == 2
        assert page.records[1].user_stats.completed == "5.3K"
        assert page.total_matches == 0
        assert page.next_page == 3

    def test_user_stats_not_requested(self):
        client, _ = _client(html=_load_fixture("games/userstats.html"))
        page = client.search_games_by_query(HLTBQuery(page=2))

        assert all(g.user_stats is None for g in page.records)

    def test_non_standard(self):
        client, _ = _client(html=_load_fixture("games/non_standard.html"))
        page = client.search_games("pokemon red")

        assert page.records[0].other["Vs."] == "2½ Hours"

    def test_no_match(self):
        client, _ = _client(html=_load_fixture("games/notfound.html"))
        page = client.search_games("bugsnaxasdf")

        assert page.records == []
        assert page.total_matches == 0
        assert page.total_pages == 0
        assert not page.has_next()

    def test_non_200(self):
        """ステータスエラー時はページを返さず RetrievalError を送出すること."""
        client, _ = _client(status_code=400)
        page = None
        with pytest.raises(RetrievalError, match="Error retrieving data"):
            page = client.search_games("bugsnax")
        assert page is None

    def test_transport_error_propagates(self):
        session = MagicMock(spec=requests.Session)
        session.post.side_effect = requests.ConnectionError("refused")
        client = HLTBClient(make_transport_config("http://hltb.test", session=session))

        with pytest.raises(TransportError):
            client.search_games("bugsnax")


class TestPagination:
    """ページ送りのテスト."""

    def test_multiple_game_pages(self):
        client, session = _client(pages={
            1: _load_fixture("games/multipage.html"),
            2: _load_fixture("games/multipage2.html"),
        })

        page = client.search_games_by_query(HLTBQuery())
        assert page.current_page == 1
        assert page.next_page == 2
        assert page.total_matches == 42848
        assert page.total_pages == 2143

        page = page.get_next_page()
        assert page.current_page == 2
        assert page.next_page == 3
        assert page.total_matches == 0  # 2ページ目以降は件数が出ない
        assert page.total_pages == 2143
        assert page.has_next()
        assert [g.id for g in page.records] == ["21", "22"]
        assert session.post.call_count == 2

    def test_next_page_keeps_query(self):
        client, session = _client(pages={
            1: _load_fixture("games/multipage.html"),
            2: _load_fixture("games/multipage2.html"),
        })
        first = client.search_games_by_query(HLTBQuery(query="ninja", sort_by=GameSortBy.MOST_POPULAR))
        second = first.get_next_page()

        forms = [c.kwargs["data"] for c in session.post.call_args_list]
        assert forms[0] == forms[1]
        assert forms[1]["sorthead"] == "popular"
        assert second.query.page == 2
        assert first.query.page == 1  # 元のページのクエリは変わらない

    def test_multiple_user_pages(self):
        client, _ = _client(pages={
            1: _load_fixture("users/multipage.html"),
            2: _load_fixture("users/multipage2.html"),
            3: _load_fixture("users/multipage3.html"),
        })

        page = client.search_users("")
        assert page.total_matches == 45
        assert page.next_page == 2

        page = page.get_next_page()
        assert page.current_page == 2
        assert page.total_matches == 0
        assert [u.name for u in page.records] == ["Wolfhound", "Arcadia"]

        page = page.get_next_page()
        assert page.current_page == 3
        assert page.next_page == 0
        assert not page.has_next()

    def test_next_page_past_end(self):
        """最終ページで次ページを要求すると通信せずにエラーになること."""
        client, session = _client(html=_load_fixture("games/basic_response.html"))
        page = client.search_games("pokemon red")
        session.post.reset_mock()

        with pytest.raises(PageNotFoundError, match="Page not found"):
            page.get_next_page()
        session.post.assert_not_called()

    def test_no_result_page_has_no_next(self):
        client, session = _client(html=_load_fixture("games/notfound.html"))
        page = client.search_games("bugsnaxasdf")

        with pytest.raises(PageNotFoundError):
            page.get_next_page()
        assert session.post.call_count == 1


class TestSearchUsers:
    """ユーザー検索のテスト."""

    def test_mixed_response(self):
        client, session = _client(html=_load_fixture("users/mixed_response.html"))
        page = client.search_users("fuzzy")

        assert len(page.records) == 3
        assert len(page.records[0].accolades) == 5
        assert page.records[1].accolades == []
        assert page.records[0].location != ""
        assert page.records[1].location == ""
        assert page.records[0].age == 39
        assert page.records[1].age is None

        form = session.post.call_args.kwargs["data"]
        assert form["t"] == "users"
        assert form["sorthead"] == "postcount"

    def test_search_dispatches_on_query_type(self):
        client, session = _client(html=_load_fixture("users/mixed_response.html"))
        page = client.search(HLTBQuery(query="fuzzy", query_type=QueryType.USERS))

        assert page.records[0].name == "fuzzylimes"
        assert session.post.call_args.kwargs["data"]["t"] == "users"


class TestJson:
    """JSON 出力のテスト."""

    def test_game_json(self):
        client, _ = _client(html=_load_fixture("games/non_standard.html"))
        data = json.loads(client.search_games("pokemon").to_json())

        assert data[0]["id"] == "7181"
        assert data[0]["other"]["Vs."] == "2½ Hours"
        assert "user-stats" not in data[0]
        assert "other" not in data[1]
        assert set(data[1]) == {
            "id", "title", "url", "box-art-url", "main", "main-extra", "completionist",
        }

    def test_user_json(self):
        client, _ = _client(html=_load_fixture("users/mixed_response.html"))
        data = json.loads(client.search_users("fuzzy").to_json())

        assert data[0]["avatar-url"].endswith("fuzzylimes_1588.jpg")
        assert data[0]["age"] == 39
        assert "age" not in data[1]
        assert "location" not in data[1]
        assert "accolades" not in data[1]
        assert data[2]["age"] == 0
