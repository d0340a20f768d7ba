"""
Centralized constants for the News Article Exporter.
All magic numbers and fixed names used across the export pipeline.
"""

# ===========================================
# GENERATOR
# ===========================================
GENERATOR_NAME = "news-article-exporter"
GENERATOR_IDENTIFIER = "NewsArticleExporter"
GENERATOR_VERSION = "2.5.0"
FORMAT_VERSION = "1.14"               # article format version emitted in documents

# ===========================================
# CHECKSUM / SYNC
# ===========================================
# Fields that change between exports without changing the article itself
VOLATILE_METADATA_FIELDS = (
    "dateCreated",
    "dateModified",
    "datePublished",
    "generatorVersion",
)
FINGERPRINT_LENGTH = 16               # hex chars kept from the SHA-256 digest

# ===========================================
# COMPONENTS
# ===========================================
COMPONENT_ERRORS = "component_errors"  # phase tag for unsupported components
FOOTNOTES_CLASS = "wp-block-footnotes"
PULLQUOTE_CLASS = "pullquote"
DARK_MODE_CONDITIONS = {
    "minSpecVersion": "1.14",
    "preferredColorScheme": "dark",
}

# Nodes that cannot be represented in the article format
UNSUPPORTED_TAGS = frozenset({
    "script", "iframe", "form", "object", "embed", "canvas", "noscript",
    "style", "input", "button", "select", "textarea", "video", "audio",
})

# Inline elements whose text falls back to the body component
INLINE_TAGS = frozenset({
    "a", "abbr", "b", "br", "cite", "code", "del", "em", "i", "ins", "kbd",
    "mark", "q", "s", "samp", "small", "span", "strong", "sub", "sup", "u",
})

BUNDLE_SCHEME = "bundle://"

# ===========================================
# API / SERVER
# ===========================================
API_TIMEOUT_SECONDS = 30              # default HTTP timeout
CHANNEL_CACHE_TTL = 300               # seconds a channel lookup is cached
ARTICLE_ID_KEY_PATH = "articleId"     # keyPath reported when an article is gone

# ===========================================
# FILE HANDLING
# ===========================================
ARTICLE_FILENAME = 'article.json'

# ===========================================
# LOGGING
# ===========================================
ROOT_LOGGER = 'exporter'
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE = 'logs/exporter.log'
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 5
