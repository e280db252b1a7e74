"""howlongtobeat 検索クライアント.

使い方:
    client = HLTBClient()
    page = client.search_games("pokemon red")
    while page.has_next():
        page = page.get_next_page()
"""

from __future__ import annotations

import logging

from hltb.constants import QueryType
from hltb.models import GameResult, HLTBQuery, ResultPage, UserResult
from hltb.scraper import apply_defaults, build_form, build_page, parse_document
from hltb.transport import TransportConfig, make_transport_config, post_search

logger = logging.getLogger(__name__)


class HLTBClient:
    """検索の入口. 接続設定は生成時に受け取り、以後は共有するだけ."""

    def __init__(self, config: TransportConfig | None = None):
        self.config = config or make_transport_config()

    def search_games(self, query: str) -> ResultPage[GameResult]:
        """ゲームタイトルで検索する. 空文字なら全ゲームが対象."""
        return self.search_games_by_query(HLTBQuery(query=query))

    def search_games_by_query(self, q: HLTBQuery) -> ResultPage[GameResult]:
        """詳細な条件でゲームを検索する. query_type は games に固定される."""
        return self._search(apply_defaults(q, QueryType.GAMES), self.search_games_by_query)

    def search_users(self, query: str) -> ResultPage[UserResult]:
        """ユーザー名で検索する. 空文字なら全ユーザーが対象."""
        return self.search_users_by_query(HLTBQuery(query=query))

    def search_users_by_query(self, q: HLTBQuery) -> ResultPage[UserResult]:
        """詳細な条件でユーザーを検索する. query_type は users に固定される."""
        return self._search(apply_defaults(q, QueryType.USERS), self.search_users_by_query)

    def search(self, q: HLTBQuery) -> ResultPage:
        """q.query_type に応じてゲームまたはユーザーを検索する（未指定はゲーム）."""
        if q.query_type == QueryType.USERS:
            return self.search_users_by_query(q)
        return self.search_games_by_query(q)

    def _search(self, q: HLTBQuery, fetcher) -> ResultPage:
        """1回の検索を実行する.

        通信エラー・ステータスエラーはそのまま呼び出し元に送出する。
        """
        logger.info("検索中: query=%r, t=%s, page=%d", q.query, q.query_type.value, q.page)
        html = post_search(self.config, build_form(q), q.page)
        soup = parse_document(html)
        return build_page(soup, q, fetcher)
