"""Constants shared across coursebrowser modules."""

# --- Data root resolution ---

# Candidate locations tried in order, relative to the working directory
# unless absolute. The first entry doubles as the fallback.
DATA_ROOT_CANDIDATES: tuple[str, ...] = (
    "public/data",
    "../public/data",
    "/public/data",
)

# --- Sidecar metadata files ---

DEPARTMENT_FILE = "dept.json"
TYPE_FILE = "type.json"
COURSE_FILE = "course.json"
INSTRUCTOR_FILE = "instructor.json"

# Label used for a material type with no entry in type.json
TYPE_FALLBACK_LABEL = "etc"

# --- Ignore patterns ---

IGNORE_FILE = ".materialsignore"

ALWAYS_IGNORE_PATTERNS: set[str] = {
    ".DS_Store",
    "Thumbs.db",
    "desktop.ini",
    ".git/",
    ".gitkeep",
    IGNORE_FILE,
}

# --- Presentation ---

SIZE_UNITS: tuple[str, ...] = ("Bytes", "KB", "MB", "GB")

PDF_EXTENSIONS: set[str] = {".pdf"}
IMAGE_EXTENSIONS: set[str] = {".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp"}
VIEWABLE_EXTENSIONS: set[str] = PDF_EXTENSIONS | IMAGE_EXTENSIONS

SORT_FIELDS: tuple[str, ...] = ("course", "instructor", "type")
ALL_OPTION = "all"

DEFAULT_BASE_URL = "/data"

FOLDER_ICON = "📁"
DEFAULT_FILE_ICON = "📄"

FILE_ICONS: dict[str, set[str]] = {
    "📄": {".pdf"},
    "📝": {".doc", ".docx"},
    "📊": {".ppt", ".pptx"},
    "📈": {".xls", ".xlsx"},
    "🗜️": {".zip", ".rar", ".7z"},
    "🖼️": {".jpg", ".jpeg", ".png", ".gif", ".svg"},
    "🎥": {".mp4", ".avi", ".mov"},
    "🎵": {".mp3", ".wav"},
    "📃": {".txt", ".md"},
    "💻": {".py", ".js", ".java", ".cpp", ".c"},
}
