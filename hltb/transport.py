"""検索エンドポイントへの HTTP 通信モジュール.

1回の検索 = 1回の POST。リトライ・バックオフは行わない。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import requests

from hltb.config import BASE_URL, REQUEST_TIMEOUT, SEARCH_PATH, USER_AGENT
from hltb.errors import RetrievalError, TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportConfig:
    """接続設定. クライアント生成時に渡し、以後は変更しない."""

    base_url: str
    timeout: float
    user_agent: str
    session: requests.Session = field(repr=False, compare=False)

    @property
    def search_url(self) -> str:
        return self.base_url + SEARCH_PATH


def make_transport_config(
    base_url: str | None = None,
    *,
    timeout: float | None = None,
    user_agent: str | None = None,
    session: requests.Session | None = None,
) -> TransportConfig:
    """未指定の項目を config のデフォルトで埋めて TransportConfig を作る."""
    return TransportConfig(
        base_url=(base_url or BASE_URL).rstrip("/"),
        timeout=REQUEST_TIMEOUT if timeout is None else timeout,
        user_agent=user_agent or USER_AGENT,
        session=session or requests.Session(),
    )


def post_search(config: TransportConfig, form: dict[str, str], page: int) -> str:
    """検索フォームを POST し、レスポンス HTML を返す.

    Args:
        config: 接続設定
        form: build_form() で作ったフォーム
        page: 取得するページ番号（1始まり）

    Returns:
        HTML 文字列。

    Raises:
        TransportError: 接続失敗・タイムアウト。
        RetrievalError: ステータスコードが 2xx 以外。
    """
    headers = {
        "User-Agent": config.user_agent,
        "Content-Type": "application/x-www-form-urlencoded",
    }

    logger.debug("検索リクエスト: url=%s, page=%d, t=%s", config.search_url, page, form.get("t"))
    try:
        resp = config.session.post(
            config.search_url,
            params={"page": page},
            data=form,
            headers=headers,
            timeout=config.timeout,
        )
    except requests.RequestException as e:
        raise TransportError(f"検索リクエスト失敗: {e}") from e

    if not 200 <= resp.status_code < 300:
        logger.debug("検索レスポンス異常: status=%d", resp.status_code)
        raise RetrievalError(status_code=resp.status_code)

    return resp.text
