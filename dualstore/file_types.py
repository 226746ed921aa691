# ==============================================
# File Types
# ==============================================
#
# PURPOSE:
#   Map a filename to its extension and a coarse category.
#   The Storage Selector uses the category for every non-JSON
#   routing rule and for the batch majority rule.
#
# FUNCTIONS:
# ----------
# - get_file_extension(filename: str) -> str
#     "photo.JPG" → "jpg", "archive.tar.gz" → "gz",
#     "README" → "", ".bashrc" → "", "name." → ""
#
# - get_file_category(extension: str) -> str
#     "jpg" → "Images", "json" → "Data", unknown → "Other"
#
# - format_file_size(num_bytes: int) -> str
#     0 → "0 Bytes", 1536 → "1.5 KB"
#
# ==============================================

from typing import Dict, List

# Category name → extensions (lowercase, no dot)
FILE_CATEGORIES: Dict[str, List[str]] = {
    "Images": ["jpg", "jpeg", "png", "gif", "bmp", "svg", "webp", "ico"],
    "Videos": ["mp4", "avi", "mov", "wmv", "flv", "mkv", "webm"],
    "Documents": ["pdf", "doc", "docx", "txt", "rtf", "odt"],
    "Spreadsheets": ["xls", "xlsx", "csv", "ods"],
    "Archives": ["zip", "rar", "7z", "tar", "gz"],
    "Code": ["js", "ts", "jsx", "tsx", "py", "java", "cpp", "c", "cs", "php", "rb", "go"],
    "Data": ["json", "xml", "yaml", "yml", "sql"],
    "Audio": ["mp3", "wav", "ogg", "flac", "aac"],
}

OTHER_CATEGORY = "Other"
DATA_CATEGORY = "Data"
MEDIA_CATEGORIES = frozenset({"Images", "Videos", "Audio"})

# Reverse lookup built once: extension → category
_EXTENSION_TO_CATEGORY: Dict[str, str] = {
    ext: category
    for category, extensions in FILE_CATEGORIES.items()
    for ext in extensions
}

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def get_file_extension(filename: str) -> str:
    """
    Return the lowercased text after the last dot of a filename.

    A name without a dot, or whose only dot is its first character
    (hidden files such as ".env"), has no extension.
    """
    dot = filename.rfind(".")
    if dot <= 0:
        return ""
    return filename[dot + 1:].lower()


def get_file_category(extension: str) -> str:
    """Look up the coarse category for an extension ("Other" when unmapped)."""
    return _EXTENSION_TO_CATEGORY.get(extension.lower(), OTHER_CATEGORY)


def format_file_size(num_bytes: int) -> str:
    """Render a byte count the way the file grid shows it (two decimals max)."""
    if num_bytes <= 0:
        return "0 Bytes"
    exponent = 0
    while num_bytes >= 1024 ** (exponent + 1) and exponent < len(_SIZE_UNITS) - 1:
        exponent += 1
    value = round(num_bytes / (1024 ** exponent), 2)
    # 1.0 → "1", 1.5 → "1.5"
    return f"{value:g} {_SIZE_UNITS[exponent]}"
