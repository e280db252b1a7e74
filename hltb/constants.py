"""検索クエリの語彙 — フォームに載せる固定値の一覧."""

from enum import Enum


class QueryType(str, Enum):
    """検索対象."""

    GAMES = "games"
    USERS = "users"


class GameSortBy(str, Enum):
    """ゲーム検索の並び順."""

    NAME = "name"  # デフォルト
    MAIN_STORY = "main"
    MAIN_EXTRAS = "mainp"
    COMPLETIONIST = "comp"
    AVERAGE_TIME = "averagea"
    TOP_RATED = "rating"
    MOST_POPULAR = "popular"
    MOST_BACKLOGS = "backlog"
    MOST_SUBMISSIONS = "usersp"
    MOST_PLAYED = "playing"
    MOST_SPEEDRUNS = "speedruns"  # howlongtobeat に投稿されたもの
    RELEASE_DATE = "release"


class UserSortBy(str, Enum):
    """ユーザー検索の並び順."""

    TOP_POSTERS = "postcount"  # デフォルト
    NAME = "name"
    GENDER = "gender"
    COMPLETED = "numcomp"
    BACKLOG = "numbacklog"


class SortDirection(str, Enum):
    NORMAL = "Normal Order"
    REVERSE = "Reverse Order"


class LengthRange(str, Enum):
    """length_min / length_max で絞り込む対象のプレイ時間."""

    MAIN_STORY = "main"
    MAIN_EXTRAS = "mainp"
    COMPLETIONIST = "comp"
    AVERAGE_TIME = "averagea"


class Modifier(str, Enum):
    """レスポンスに含める追加情報.

    hidden_stats は全件を隠すだけなので定義しない。
    """

    NONE = ""
    SHOW_DLC = "show_dlc"
    ONLY_DLC = "only_dlc"
    USER_STATS = "user_stats"


class Platform(str, Enum):
    THREE_DO = "3DO"
    AMIGA = "Amiga"
    AMSTRAD_CPC = "Amstrad CPC"
    ANDROID = "Android"
    APPLE_II = "Apple II"
    ARCADE = "Arcade"
    ATARI_2600 = "Atari 2600"
    ATARI_5200 = "Atari 5200"
    ATARI_7800 = "Atari 7800"
    ATARI_8BIT_FAMILY = "Atari 8-bit Family"
    ATARI_JAGUAR = "Atari Jaguar"
    ATARI_JAGUAR_CD = "Atari Jaguar CD"
    ATARI_LYNX = "Atari Lynx"
    ATARI_ST = "Atari ST"
    BBC_MICRO = "BBC Micro"
    BROWSER = "Browser"
    COLECOVISION = "ColecoVision"
    COMMODORE_64 = "Commodore 64"
    DREAMCAST = "Dreamcast"
    EMULATED = "Emulated"
    FM_TOWNS = "FM Towns"
    GAME_AND_WATCH = "Game & Watch"
    GAME_BOY = "Game Boy"
    GAME_BOY_ADVANCE = "Game Boy Advance"
    GAME_BOY_COLOR = "Game Boy Color"
    GEAR_VR = "Gear VR"
    GOOGLE_STADIA = "Google Stadia"
    INTELLIVISION = "Intellivision"
    INTERACTIVE_MOVIE = "Interactive Movie"
    IOS = "iOS"
    LINUX = "Linux"
    MAC = "Mac"
    MOBILE = "Mobile"
    MSX = "MSX"
    N_GAGE = "N-Gage"
    NEC_PC_8800 = "NEC PC-8800"
    NEC_PC_9801_21 = "NEC PC-9801/21"
    NEC_PC_FX = "NEC PC-FX"
    NEO_GEO = "Neo Geo"
    NEO_GEO_CD = "Neo Geo CD"
    NEO_GEO_POCKET = "Neo Geo Pocket"
    NES = "NES"
    NINTENDO_3DS = "Nintendo 3DS"
    NINTENDO_64 = "Nintendo 64"
    NINTENDO_DS = "Nintendo DS"
    NINTENDO_GAMECUBE = "Nintendo GameCube"
    NINTENDO_SWITCH = "Nintendo Switch"
    OCULUS_GO = "Oculus Go"
    OCULUS_QUEST = "Oculus Quest"
    ONLIVE = "OnLive"
    OUYA = "Ouya"
    PC = "PC"
    PC_VR = "PC VR"
    PHILIPS_CD_I = "Philips CD-i"
    PHILIPS_VIDEOPAC_G7000 = "Philips Videopac G7000"
    PLAYSTATION = "PlayStation"
    PLAYSTATION_2 = "PlayStation 2"
    PLAYSTATION_3 = "PlayStation 3"
    PLAYSTATION_4 = "PlayStation 4"
    PLAYSTATION_5 = "PlayStation 5"
    PLAYSTATION_MOBILE = "PlayStation Mobile"
    PLAYSTATION_NOW = "PlayStation Now"
    PLAYSTATION_PORTABLE = "PlayStation Portable"
    PLAYSTATION_VITA = "PlayStation Vita"
    PLAYSTATION_VR = "PlayStation VR"
    PLUG_AND_PLAY = "Plug & Play"
    SEGA_32X = "Sega 32X"
    SEGA_CD = "Sega CD"
    SEGA_GAME_GEAR = "Sega Game Gear"
    SEGA_MASTER_SYSTEM = "Sega Master System"
    SEGA_MEGA_DRIVE_GENESIS = "Sega Mega Drive/Genesis"
    SEGA_SATURN = "Sega Saturn"
    SG_1000 = "SG-1000"
    SHARP_X68000 = "Sharp X68000"
    SUPER_NINTENDO = "Super Nintendo"
    TIGER_HANDHELD = "Tiger Handheld"
    TURBOGRAFX_16 = "TurboGrafx-16"
    TURBOGRAFX_CD = "TurboGrafx-CD"
    VIRTUAL_BOY = "Virtual Boy"
    WII = "Wii"
    WII_U = "Wii U"
    WINDOWS_PHONE = "Windows Phone"
    WONDERSWAN = "WonderSwan"
    XBOX = "Xbox"
    XBOX_360 = "Xbox 360"
    XBOX_ONE = "Xbox One"
    XBOX_SERIES_XS = "Xbox Series X/S"
    ZX_SPECTRUM = "ZX Spectrum"
