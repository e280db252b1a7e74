"""データモデル定義."""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

from hltb.constants import (
    GameSortBy,
    LengthRange,
    Modifier,
    Platform,
    QueryType,
    SortDirection,
    UserSortBy,
)
from hltb.errors import PageNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HLTBQuery:
    """検索条件. 未指定の項目は送信前にデフォルトで埋める."""

    query: str = ""  # 空文字は全件検索
    query_type: QueryType | None = None
    sort_by: GameSortBy | UserSortBy | None = None
    sort_direction: SortDirection | None = None
    platform: Platform | None = None
    length_type: LengthRange | None = None
    length_min: str = ""
    length_max: str = ""
    modifier: Modifier = Modifier.NONE
    random: bool = False
    page: int = 0  # 1始まり。0 = 未指定


@dataclass
class UserStats:
    """ゲームに対するユーザー活動の集計. Modifier.USER_STATS 指定時のみ付与."""

    completed: str = ""  # "Polled"
    rating: str = ""
    backlog: str = ""
    playing: str = ""
    retired: str = ""
    speedruns: str = ""

    def to_dict(self) -> dict:
        return {k: v for k, v in dataclasses.asdict(self).items() if v}


@dataclass
class GameResult:
    """ゲーム検索結果の1件. 時間はすべて表示文字列のまま保持する."""

    id: str
    title: str
    url: str
    box_art_url: str = ""
    main: str = ""
    main_extra: str = ""
    completionist: str = ""
    other: dict[str, str] = field(default_factory=dict)  # マルチプレイ系など3区分に収まらない時間
    user_stats: UserStats | None = None

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "box-art-url": self.box_art_url,
            "main": self.main,
            "main-extra": self.main_extra,
            "completionist": self.completionist,
        }
        if self.other:
            d["other"] = dict(self.other)
        if self.user_stats is not None:
            d["user-stats"] = self.user_stats.to_dict()
        return d


@dataclass
class UserResult:
    """ユーザー検索結果の1件."""

    id: str
    name: str
    url: str
    avatar_url: str = ""
    location: str = ""
    backlog: str = ""
    complete: str = ""
    gender: str = ""
    posts: str = ""
    age: int | None = None  # パース不能なら None（0 とは区別する）
    accolades: list[str] = field(default_factory=list)  # 表示順

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "avatar-url": self.avatar_url,
        }
        for key in ("location", "backlog", "complete", "gender", "posts"):
            value = getattr(self, key)
            if value:
                d[key] = value
        if self.age is not None:
            d["age"] = self.age
        if self.accolades:
            d["accolades"] = list(self.accolades)
        return d


T = TypeVar("T", GameResult, UserResult)


@dataclass(frozen=True)
class ResultPage(Generic[T]):
    """検索結果の1ページ.

    次ページ取得用に、元のクエリと検索関数（クライアントのメソッド）を保持する。
    total_matches はサイトが1ページ目にしか件数を出さないため、2ページ目以降は常に 0。
    """

    records: list[T] = field(default_factory=list)
    total_matches: int = 0
    total_pages: int = 0
    current_page: int = 0
    next_page: int = 0  # 0 = 次ページなし
    query: HLTBQuery | None = field(default=None, repr=False, compare=False)
    fetcher: Callable[[HLTBQuery], ResultPage[T]] | None = field(
        default=None, repr=False, compare=False
    )

    def has_next(self) -> bool:
        """次のページが取得可能か."""
        return self.next_page != 0

    def get_next_page(self) -> ResultPage[T]:
        """次のページを取得する.

        元のクエリの page だけを差し替えて、同じ検索関数でもう一度問い合わせる。

        Raises:
            PageNotFoundError: 次のページがない場合（通信は行わない）。
        """
        if not self.has_next() or self.query is None or self.fetcher is None:
            raise PageNotFoundError()
        logger.debug("次ページ取得: page=%d", self.next_page)
        return self.fetcher(dataclasses.replace(self.query, page=self.next_page))

    def to_json(self) -> str:
        """レコードをインデント付き JSON 配列に変換する."""
        return json.dumps(
            [r.to_dict() for r in self.records], indent=2, ensure_ascii=False
        )


def compute_next_page(current_page: int, total_pages: int) -> int:
    """total_pages > current_page なら current_page + 1、それ以外は 0."""
    if total_pages > current_page:
        return current_page + 1
    return 0
