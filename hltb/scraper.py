"""howlongtobeat 検索結果のスクレイピングモジュール.

処理の流れ:
  1. クエリの未指定項目をデフォルトで埋め、フォームに変換する
  2. 先頭の li に "No results" があれば結果なし
  3. 見出しとページ送りから総件数・総ページ数を読む（読めなければデフォルト値）
  4. 結果行（ul > li.back_darkish）ごとにレコードを作る

結果行はラベル要素（search_list_tidbit）と、その直後の兄弟要素の値のペアで
構成される。マルチプレイ系のゲームは search_list_tidbit_short で始まる別の
レイアウトになるため、行ごとにレイアウトを判定して抽出方法を切り替える。
"""

from __future__ import annotations

import dataclasses
import logging
import re
from enum import Enum
from typing import Callable

from bs4 import BeautifulSoup
from bs4.element import Tag

from hltb.config import SITE_URL
from hltb.constants import (
    GameSortBy,
    LengthRange,
    Modifier,
    QueryType,
    SortDirection,
    UserSortBy,
)
from hltb.errors import ExtractionError
from hltb.models import (
    GameResult,
    HLTBQuery,
    ResultPage,
    UserResult,
    UserStats,
    compute_next_page,
)

logger = logging.getLogger(__name__)

NO_RESULTS_MARKER = "No results"
GAME_ID_MARKER = "game?id="
USER_ID_MARKER = "user?n="

_ROW_SELECTOR = "ul > li.back_darkish"
_IMAGE_SELECTOR = "div > a > img"
_NAME_SELECTOR = "h3 > a"
_DETAILS_BLOCK_SELECTOR = ".search_list_details_block"
_TIDBIT_SELECTOR = ".search_list_tidbit.text_white"
_SHORT_TIDBIT_CLASS = "search_list_tidbit_short"
_PAGE_SELECTOR = "span.search_list_page"
_ACCOLADE_SELECTOR = ".search_list_details > h3 > span"

# "We Found 42848 Games for ..." / "Found 12 Users"
_TOTAL_MATCHES_PATTERN = re.compile(r"Found (\S+) \w+")
_WHITESPACE_RUN_PATTERN = re.compile(r"\s{2,}")

# ゲーム行のラベル → (格納先, 属性名)。未知のラベルは無視する
GAME_LABELS: dict[str, tuple[str, str]] = {
    "Main Story": ("game", "main"),
    "Main + Extra": ("game", "main_extra"),
    "Completionist": ("game", "completionist"),
    "Polled": ("stats", "completed"),
    "Rated": ("stats", "rating"),
    "Backlog": ("stats", "backlog"),
    "Playing": ("stats", "playing"),
    "Speedruns": ("stats", "speedruns"),
    "Retired": ("stats", "retired"),
}
_GAME_TIME_FIELDS = ("main", "main_extra", "completionist")


def _parse_age(value: str) -> int | None:
    try:
        return int(value)
    except ValueError:
        return None


# ユーザー行のラベル → (属性名, 変換関数)
USER_LABELS: dict[str, tuple[str, Callable[[str], object]]] = {
    "Backlog": ("backlog", str),
    "Complete": ("complete", str),
    "Gender": ("gender", str),
    "Posts": ("posts", str),
    "Age": ("age", _parse_age),
}


class RowLayout(Enum):
    """ゲーム行のレイアウト."""

    FIXED = "fixed"  # Main Story / Main + Extra / Completionist
    OPEN_MAP = "open_map"  # マルチプレイ系。ラベルをそのままキーにする


# ---------------------------------------------------------------------------
# クエリ → フォーム
# ---------------------------------------------------------------------------

def apply_defaults(q: HLTBQuery, query_type: QueryType | None = None) -> HLTBQuery:
    """未指定の項目をデフォルト値で埋めた新しいクエリを返す.

    Args:
        q: 呼び出し元のクエリ（変更しない）
        query_type: 指定すると q.query_type より優先する

    Returns:
        query_type / sort_by / sort_direction / length_type / page が埋まったクエリ。
    """
    kind = QueryType(query_type or q.query_type or QueryType.GAMES)
    if kind == QueryType.GAMES:
        default_sort: GameSortBy | UserSortBy = GameSortBy.NAME
    else:
        default_sort = UserSortBy.TOP_POSTERS

    return dataclasses.replace(
        q,
        query_type=kind,
        sort_by=q.sort_by or default_sort,
        sort_direction=q.sort_direction or SortDirection.NORMAL,
        length_type=q.length_type or LengthRange.MAIN_STORY,
        page=q.page if q.page >= 1 else 1,
    )


def _form_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def build_form(q: HLTBQuery) -> dict[str, str]:
    """検索エンドポイントが受け付けるフォームを作る. 未指定項目も空文字で必ず含める."""
    return {
        "queryString": q.query or "",
        "t": _form_value(q.query_type),
        "sorthead": _form_value(q.sort_by),
        "sortd": _form_value(q.sort_direction),
        "plat": _form_value(q.platform),
        "length_type": _form_value(q.length_type),
        "length_min": q.length_min or "",
        "length_max": q.length_max or "",
        "detail": _form_value(q.modifier),
        "randomize": "1" if q.random else "0",
    }


# ---------------------------------------------------------------------------
# ドキュメント・ページ情報
# ---------------------------------------------------------------------------

def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def has_results(soup: BeautifulSoup) -> bool:
    """先頭の li に "No results" が含まれていなければ True.

    li が1つもない場合も True を返し、空の行集合として抽出を続ける。
    """
    first = soup.find("li")
    if first is None:
        return True
    return NO_RESULTS_MARKER not in first.get_text()


def parse_total_matches(soup: BeautifulSoup, page: int) -> int:
    """見出しの "Found <N> ..." から総件数を読む.

    サイトは1ページ目にしか件数を出さないので、2ページ目以降は読まずに 0 を返す。
    見出しがない・数値でない場合も 0。
    """
    if page != 1:
        return 0

    heading = soup.find("h3")
    if heading is None:
        return 0

    m = _TOTAL_MATCHES_PATTERN.search(heading.get_text())
    if not m:
        return 0
    try:
        return int(m.group(1))
    except ValueError:
        logger.debug("総件数が数値ではない: %s", m.group(1))
        return 0


def parse_total_pages(soup: BeautifulSoup) -> int:
    """ページ送りの最後の span から総ページ数を読む. 読めなければ 1."""
    pages = soup.select(_PAGE_SELECTOR)
    if not pages:
        return 1
    try:
        return int(pages[-1].get_text())
    except ValueError:
        return 1


# ---------------------------------------------------------------------------
# 行の共通処理
# ---------------------------------------------------------------------------

def sanitize_title(s: str) -> str:
    """前後の空白を除き、改行と連続する空白を1つのスペースにまとめる."""
    s = s.strip().replace("\n", " ")
    return _WHITESPACE_RUN_PATTERN.sub(" ", s)


def _extract_id(anchor: Tag | None, marker: str) -> tuple[str, str]:
    """リンクの href から marker 以降を ID として取り出す.

    Returns:
        (id, href) のタプル。

    Raises:
        ExtractionError: リンクがない、または href に marker がない場合。
    """
    if anchor is None:
        raise ExtractionError(f"ID を含むリンクが見つかりません: marker={marker}")
    href = anchor.get("href") or ""
    if marker not in href:
        raise ExtractionError(f"href に {marker} がありません: href={href}")
    return href.split(marker, 1)[1], href


def _image_src(row: Tag) -> str:
    img = row.select_one(_IMAGE_SELECTOR)
    if img is None:
        return ""
    return img.get("src") or ""


def _tidbit_value(label_node: Tag) -> str:
    """ラベル要素の直後の兄弟要素のテキスト."""
    value_node = label_node.find_next_sibling()
    if value_node is None:
        return ""
    return value_node.get_text().strip()


def _labelled_values(row: Tag, selector: str) -> list[tuple[str, str]]:
    return [
        (node.get_text().strip(), _tidbit_value(node))
        for node in row.select(selector)
    ]


# ---------------------------------------------------------------------------
# ゲーム
# ---------------------------------------------------------------------------

def detect_row_layout(row: Tag) -> RowLayout:
    """詳細ブロックの最初の子要素が search_list_tidbit_short なら OPEN_MAP."""
    block = row.select_one(_DETAILS_BLOCK_SELECTOR)
    if block is None:
        return RowLayout.FIXED
    first = block.find(True, recursive=False)
    if first is not None and _SHORT_TIDBIT_CLASS in (first.get("class") or []):
        return RowLayout.OPEN_MAP
    return RowLayout.FIXED


def extract_open_map(row: Tag) -> dict[str, str]:
    """search_list_tidbit_short のラベルと値をそのまま辞書にする."""
    return dict(_labelled_values(row, "." + _SHORT_TIDBIT_CLASS))


def extract_fixed_fields(row: Tag) -> tuple[dict[str, str], UserStats]:
    """固定ラベルの行から時間とユーザー統計を取り出す.

    Returns:
        (GameResult に渡す時間のキーワード引数, UserStats)
    """
    times: dict[str, str] = {}
    stats = UserStats()
    for label, value in _labelled_values(row, _TIDBIT_SELECTOR):
        dest = GAME_LABELS.get(label)
        if dest is None:
            continue
        target, attr = dest
        if target == "game":
            times[attr] = value
        else:
            setattr(stats, attr, value)
    return times, stats


def parse_game_row(row: Tag, modifier: Modifier | str = Modifier.NONE) -> GameResult:
    """ゲーム結果の1行を GameResult に変換する.

    Raises:
        ExtractionError: タイトルのリンクから ID が取れない場合。
    """
    anchor = row.select_one(_NAME_SELECTOR)
    game_id, href = _extract_id(anchor, GAME_ID_MARKER)

    layout = detect_row_layout(row)
    other: dict[str, str] = {}
    times: dict[str, str] = {}
    stats = UserStats()
    if layout is RowLayout.OPEN_MAP:
        logger.debug("非標準レイアウトの行: id=%s", game_id)
        other = extract_open_map(row)
    else:
        times, stats = extract_fixed_fields(row)

    return GameResult(
        id=game_id,
        title=sanitize_title(anchor.get_text()),
        url=SITE_URL + href,
        box_art_url=_image_src(row),
        other=other,
        # 統計はリクエストした場合のみ付ける
        user_stats=stats if modifier == Modifier.USER_STATS else None,
        **times,
    )


def parse_game_results(soup: BeautifulSoup, modifier: Modifier | str = Modifier.NONE) -> list[GameResult]:
    return [parse_game_row(row, modifier) for row in soup.select(_ROW_SELECTOR)]


# ---------------------------------------------------------------------------
# ユーザー
# ---------------------------------------------------------------------------

def extract_accolades(row: Tag) -> list[str]:
    """見出し内のバッジの title を表示順に集める. title のないバッジは飛ばす."""
    holder = row.select_one(_ACCOLADE_SELECTOR)
    if holder is None:
        return []
    return [badge["title"] for badge in holder.find_all("span") if badge.has_attr("title")]


def parse_user_row(row: Tag) -> UserResult:
    """ユーザー結果の1行を UserResult に変換する.

    名前はゲームのタイトルと違い、リンクのテキストをそのまま使う。

    Raises:
        ExtractionError: 名前のリンクから ID が取れない場合。
    """
    anchor = row.select_one(_NAME_SELECTOR)
    user_id, href = _extract_id(anchor, USER_ID_MARKER)

    avatar = _image_src(row)
    location_node = row.find("h4")

    user = UserResult(
        id=user_id,
        name=anchor.get_text(),
        url=SITE_URL + href,
        avatar_url=SITE_URL + avatar if avatar else "",
        location=location_node.get_text() if location_node is not None else "",
        accolades=extract_accolades(row),
    )

    # どの項目も任意入力なので、あるものだけ埋める
    for label, value in _labelled_values(row, _TIDBIT_SELECTOR):
        dest = USER_LABELS.get(label)
        if dest is None:
            continue
        attr, convert = dest
        setattr(user, attr, convert(value))
    return user


def parse_user_results(soup: BeautifulSoup) -> list[UserResult]:
    return [parse_user_row(row) for row in soup.select(_ROW_SELECTOR)]


# ---------------------------------------------------------------------------
# ページ組み立て
# ---------------------------------------------------------------------------

def build_page(
    soup: BeautifulSoup,
    q: HLTBQuery,
    fetcher: Callable[[HLTBQuery], ResultPage] | None = None,
) -> ResultPage:
    """デフォルト適用済みのクエリとドキュメントから ResultPage を作る."""
    if not has_results(soup):
        logger.info("検索結果なし: query=%r, t=%s", q.query, _form_value(q.query_type))
        return ResultPage(current_page=q.page, query=q, fetcher=fetcher)

    total_matches = parse_total_matches(soup, q.page)
    total_pages = parse_total_pages(soup)

    if q.query_type == QueryType.USERS:
        records: list = parse_user_results(soup)
    else:
        records = parse_game_results(soup, q.modifier)

    logger.info(
        "検索結果: %d 件 (page=%d/%d, matches=%d)",
        len(records), q.page, total_pages, total_matches,
    )
    return ResultPage(
        records=records,
        total_matches=total_matches,
        total_pages=total_pages,
        current_page=q.page,
        next_page=compute_next_page(q.page, total_pages),
        query=q,
        fetcher=fetcher,
    )


def _validate_label_tables() -> None:
    """ラベル表の格納先がモデルの属性と一致しているか確認する."""
    stats_fields = {f.name for f in dataclasses.fields(UserStats)}
    user_fields = {f.name for f in dataclasses.fields(UserResult)}

    game_targets = {attr for target, attr in GAME_LABELS.values() if target == "game"}
    stats_targets = {attr for target, attr in GAME_LABELS.values() if target == "stats"}
    if game_targets != set(_GAME_TIME_FIELDS):
        raise RuntimeError(f"GAME_LABELS の時間項目が不一致: {sorted(game_targets)}")
    if stats_targets != stats_fields:
        raise RuntimeError(f"GAME_LABELS の統計項目が不一致: {sorted(stats_targets)}")

    missing = {attr for attr, _ in USER_LABELS.values()} - user_fields
    if missing:
        raise RuntimeError(f"USER_LABELS に UserResult にない属性: {sorted(missing)}")


_validate_label_tables()
