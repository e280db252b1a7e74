"""設定モジュール — 環境変数・定数定義."""

import os
from pathlib import Path

from dotenv import load_dotenv

# .env はプロジェクトルートに配置
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# --- howlongtobeat 検索 ---
BASE_URL: str = os.environ.get("HLTB_BASE_URL", "https://howlongtobeat.com").rstrip("/")
SEARCH_PATH = "/search_results"

# レコードの url / avatar-url はサイトの正規 URL で組み立てる
SITE_URL = "https://howlongtobeat.com/"

# --- User-Agent ---
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)

# --- リクエスト設定 ---
REQUEST_TIMEOUT = float(os.environ.get("HLTB_REQUEST_TIMEOUT", "10"))  # 秒

# --- ログ ---
LOG_DIR = Path(os.environ.get("HLTB_LOG_DIR", _PROJECT_ROOT / "logs"))
