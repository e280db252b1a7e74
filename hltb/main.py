"""howlongtobeat 検索 — コマンドラインエントリーポイント.

処理フロー:
  1. 引数からクエリを組み立てる（-g ゲーム / -u ユーザー）
  2. 検索実行（--all-pages なら最終ページまで）
  3. レコードを JSON 配列で標準出力に出す
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime

from hltb.client import HLTBClient
from hltb.config import LOG_DIR
from hltb.constants import GameSortBy, Modifier, Platform, QueryType, SortDirection, UserSortBy
from hltb.errors import HLTBError
from hltb.models import HLTBQuery


def setup_logging(level: int = logging.INFO) -> None:
    """ロギングの初期設定. 標準出力は JSON 用に空けておく."""
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / f"hltb_{datetime.now().strftime('%Y%m%d')}.log"
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hltb", description="Search howlongtobeat.com and print the results as JSON.")
    p.add_argument("-g", dest="game", default="", help="game title to query for")
    p.add_argument("-u", dest="user", default="", help="user name to query for")
    p.add_argument("--page", type=int, default=1, help="page to fetch (default: 1)")
    p.add_argument("--sort-by", default=None, help="sort field, e.g. name, main, popular, postcount")
    p.add_argument("--reverse", action="store_true", help="reverse the sort direction")
    p.add_argument("--platform", default=None, help='platform filter, e.g. "PC", "Nintendo Switch"')
    p.add_argument("--user-stats", action="store_true", help="include user stats for games")
    p.add_argument("--dlc", choices=("show", "only"), default=None, help="include or isolate DLC")
    p.add_argument("--random", action="store_true", help="return a random result")
    p.add_argument("--all-pages", action="store_true", help="follow next pages until the last one")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return p


def build_query(args: argparse.Namespace) -> HLTBQuery:
    """引数から HLTBQuery を組み立てる. 不正な値は ValueError."""
    if args.user:
        query_type = QueryType.USERS
        sort_by = UserSortBy(args.sort_by) if args.sort_by else None
    else:
        query_type = QueryType.GAMES
        sort_by = GameSortBy(args.sort_by) if args.sort_by else None

    if args.user_stats:
        modifier = Modifier.USER_STATS
    elif args.dlc == "show":
        modifier = Modifier.SHOW_DLC
    elif args.dlc == "only":
        modifier = Modifier.ONLY_DLC
    else:
        modifier = Modifier.NONE

    return HLTBQuery(
        query=args.user or args.game,
        query_type=query_type,
        sort_by=sort_by,
        sort_direction=SortDirection.REVERSE if args.reverse else None,
        platform=Platform(args.platform) if args.platform else None,
        modifier=modifier,
        random=args.random,
        page=args.page,
    )


def run(argv: list[str] | None = None) -> int:
    """メイン処理. 終了コードを返す."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.game and not args.user:
        parser.print_help(sys.stderr)
        return 1

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)
    logger = logging.getLogger(__name__)

    try:
        query = build_query(args)
    except ValueError as e:
        logger.error("引数エラー: %s", e)
        return 1

    client = HLTBClient()
    try:
        page = client.search(query)
        records = [r.to_dict() for r in page.records]
        while args.all_pages and page.has_next():
            page = page.get_next_page()
            records.extend(r.to_dict() for r in page.records)
    except HLTBError as e:
        logger.error("検索失敗: %s", e)
        return 1

    print(json.dumps(records, indent=2, ensure_ascii=False))
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
