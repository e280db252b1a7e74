"""main モジュールのテスト."""

import json
from unittest.mock import MagicMock, patch

from hltb.constants import GameSortBy, Modifier, Platform, QueryType, SortDirection, UserSortBy
from hltb.errors import RetrievalError
from hltb.main import build_parser, build_query, run
from hltb.models import GameResult, HLTBQuery, ResultPage


def _args(*argv):
    return build_parser().parse_args(list(argv))


class TestBuildQuery:
    """build_query のテスト."""

    def test_game(self):
        q = build_query(_args("-g", "celeste"))

        assert q.query == "celeste"
        assert q.query_type == QueryType.GAMES
        assert q.sort_by is None
        assert q.modifier == Modifier.NONE
        assert q.page == 1

    def test_game_options(self):
        q = build_query(_args(
            "-g", "zelda", "--sort-by", "popular", "--reverse",
            "--platform", "Nintendo Switch", "--user-stats", "--random", "--page", "2",
        ))

        assert q.sort_by == GameSortBy.MOST_POPULAR
        assert q.sort_direction == SortDirection.REVERSE
        assert q.platform == Platform.NINTENDO_SWITCH
        assert q.modifier == Modifier.USER_STATS
        assert q.random is True
        assert q.page == 2

    def test_dlc(self):
        assert build_query(_args("-g", "x", "--dlc", "only")).modifier == Modifier.ONLY_DLC
        assert build_query(_args("-g", "x", "--dlc", "show")).modifier == Modifier.SHOW_DLC

    def test_user(self):
        q = build_query(_args("-u", "fuzzy", "--sort-by", "numcomp"))

        assert q.query == "fuzzy"
        assert q.query_type == QueryType.USERS
        assert q.sort_by == UserSortBy.COMPLETED


@patch("hltb.main.setup_logging")
class TestRun:
    """run のテスト."""

    def test_requires_game_or_user(self, mock_logging):
        assert run([]) == 1
        mock_logging.assert_not_called()

    def test_invalid_sort(self, mock_logging):
        assert run(["-g", "x", "--sort-by", "nope"]) == 1

    @patch("hltb.main.HLTBClient")
    def test_prints_json(self, mock_client_cls, mock_logging, capsys):
        mock_client = MagicMock()
        mock_client_cls.return_value = mock_client
        mock_client.search.return_value = ResultPage(
            records=[GameResult(id="42818", title="Celeste", url="https://howlongtobeat.com/game?id=42818")],
            current_page=1,
            total_pages=1,
        )

        assert run(["-g", "celeste"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data[0]["id"] == "42818"
        assert data[0]["title"] == "Celeste"

    @patch("hltb.main.HLTBClient")
    def test_all_pages(self, mock_client_cls, mock_logging, capsys):
        second = ResultPage(records=[GameResult(id="2", title="b", url="u")], current_page=2, total_pages=2)
        fetcher = MagicMock(return_value=second)
        first = ResultPage(
            records=[GameResult(id="1", title="a", url="u")],
            current_page=1, total_pages=2, next_page=2,
            query=HLTBQuery(page=1), fetcher=fetcher,
        )
        mock_client_cls.return_value.search.return_value = first

        assert run(["-g", "x", "--all-pages"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert [g["id"] for g in data] == ["1", "2"]
        fetcher.assert_called_once()

    @patch("hltb.main.HLTBClient")
    def test_search_error(self, mock_client_cls, mock_logging, capsys):
        mock_client_cls.return_value.search.side_effect = RetrievalError(status_code=500)

        assert run(["-g", "celeste"]) == 1
        assert capsys.readouterr().out == ""
