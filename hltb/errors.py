"""例外定義."""

from __future__ import annotations


class HLTBError(Exception):
    """howlongtobeat 検索に関する例外の基底クラス."""


class TransportError(HLTBError):
    """接続失敗・タイムアウトなどネットワーク層のエラー."""


class RetrievalError(HLTBError):
    """検索エンドポイントが 2xx 以外を返した."""

    def __init__(self, message: str = "Error retrieving data", status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ExtractionError(HLTBError):
    """結果行から ID を含むリンクが取れなかった."""


class PageNotFoundError(HLTBError):
    """次のページが存在しない."""

    def __init__(self, message: str = "Page not found"):
        super().__init__(message)
