from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
PROCESSED_DATA_DIR = DATA_DIR / "processed"
PLAYERS_DIR = DATA_DIR / "players"

# Scraped export file name pattern (use .format(season=...))
EXPORT_FILE_PATTERN = "players_{season}.jsonl"

# Vietnamese stat label (as shown on the source site) -> canonical key
STATS_MAPPING = {
    # Attack
    "Tốc độ": "speed",
    "Tăng tốc": "acceleration",
    "Dứt điểm": "finishing",
    "Lực sút": "shotPower",
    "Sút xa": "longShots",
    "Chọn vị trí": "positioning",
    "Vô lê": "volleys",
    "Penalty": "penalties",

    # Passing
    "Chuyền ngắn": "shortPassing",
    "Tầm nhìn": "vision",
    "Tạt bóng": "crossing",
    "Chuyền dài": "longPassing",
    "Đá phạt": "freeKickAccuracy",
    "Sút xoáy": "curve",

    # Dribbling
    "Rê bóng": "dribbling",
    "Giữ bóng": "ballControl",
    "Khéo léo": "agility",
    "Thăng bằng": "balance",
    "Phản ứng": "reactions",

    # Defending
    "Kèm người": "marking",
    "Lấy bóng": "standingTackle",
    "Cắt bóng": "interceptions",
    "Xoạc bóng": "slidingTackle",

    # Physical
    "Đánh đầu": "heading",
    "Sức mạnh": "strength",
    "Thể lực": "stamina",
    "Quyết đoán": "aggression",
    "Nhảy": "jumping",
    "Bình tĩnh": "composure",

    # Goalkeeping
    "TM đổ người": "gkDiving",
    "TM bắt bóng": "gkHandling",
    "TM phát bóng": "gkKicking",
    "TM phản xạ": "gkReflexes",
    "TM chọn vị trí": "gkPositioning",
}

# Canonical key -> Vietnamese label
STATS_NAMES = {key: label for label, key in STATS_MAPPING.items()}

# Display order for a player's full stat sheet
STATS_ORDER = list(STATS_MAPPING.values())

# Position codes used on player cards
POSITIONS = [
    "ST", "LW", "RW", "CF", "CAM",
    "LM", "RM", "CM", "CDM",
    "LWB", "RWB", "LB", "RB", "CB", "GK",
]
