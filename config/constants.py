"""
Centralized constants for Translation Hub.
Fixed values shared by the providers, the document pipeline and the API.
"""

# ===========================================
# FILE HANDLING
# ===========================================
MAX_FILE_SIZE_BYTES = 5 * 1024 * 1024    # upload limit (5 MiB)
SUPPORTED_EXTENSIONS = [
    '.txt', '.docx', '.doc', '.pdf', '.pptx', '.ppt', '.html'
]
# Formats only the document provider can translate
PROVIDER_ONLY_EXTENSIONS = ['.pdf', '.pptx', '.ppt']

# ===========================================
# CHAT TRANSLATION
# ===========================================
TRANSLATION_START_MARKER = '<translation>'
TRANSLATION_END_MARKER = '</translation>'
TRANSLATION_TEMPERATURE = 0.01
TRANSLATION_MAX_TOKENS = 4000
MIN_CREDENTIAL_LENGTH = 20               # key must be longer than this

# Checked in order, first match wins
BOILERPLATE_PREFIXES = [
    "Translation:", "Translated:", "Here's the translation:",
    "The translation is:", "In Vietnamese:", "In English:",
    "Translated text:", "Bản dịch:", "Dịch:", "Vietnamese:", "English:",
    "Here is the", "Here's the", "This is the", "Here is your",
]

BOILERPLATE_SUFFIXES = [
    "This is the translation.", "Hope this helps.", "I've translated the text.",
    "I've translated it for you.", "That's the translation.",
    "Hope that helps!", "Let me know if you need anything else.",
]

# ===========================================
# DOCUMENT PROVIDER
# ===========================================
DOCUMENT_POLL_INTERVAL = 1.0             # seconds between status checks
DOCUMENT_TIMEOUT_SECONDS = 300.0         # external deadline for a document job
DOCUMENT_STATUS_DONE = 'done'
DOCUMENT_STATUS_ERROR = 'error'

# ===========================================
# ANALYSIS
# ===========================================
GRAMMAR_FALLBACK_MESSAGE = "Không thể kiểm tra ngữ pháp"
GRAMMAR_GENERATION_CONFIG = {
    "temperature": 0.3,
    "topP": 0.8,
    "topK": 40,
    "maxOutputTokens": 1024,
}

# ===========================================
# PDF RECONSTRUCTION (millimetres)
# ===========================================
PDF_COLUMN_WIDTH_MM = 180
PDF_LEFT_MARGIN_MM = 10
PDF_FIRST_LINE_MM = 10
PDF_LINE_HEIGHT_MM = 7
PDF_PAGE_LIMIT_MM = 280
PDF_FONT_SIZE = 12

# ===========================================
# SESSION
# ===========================================
DEBOUNCE_SECONDS = 1.0                   # quiet period before auto-translate
HISTORY_LIMIT = 50

# ===========================================
# API / SERVER
# ===========================================
API_TIMEOUT_SECONDS = 60                 # per HTTP request to a provider

# ===========================================
# LOGGING
# ===========================================
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE = 'logs/translation_hub.log'
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 5
