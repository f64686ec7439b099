"""
Constants shared with the code that loads and saves translation files.
"""

# Supported file formats
FORMAT_XLIFF12 = "xlf"
FORMAT_XLIFF20 = "xlf2"
FORMAT_XMB = "xmb"
FORMAT_XTB = "xtb"

# Human readable file type labels
FILETYPE_XLIFF12 = "XLIFF 1.2"
FILETYPE_XLIFF20 = "XLIFF 2.0"
FILETYPE_XMB = "XMB"
FILETYPE_XTB = "XTB"

# Abstract translation states
STATE_NEW = "new"
STATE_TRANSLATED = "translated"
STATE_FINAL = "final"

ALL_STATES = (STATE_NEW, STATE_TRANSLATED, STATE_FINAL)

# Normalization formats for ParsedMessage.as_display_string()
NORMALIZATION_FORMAT_DEFAULT = "default"
# {{n}} placeholders only, no markup (used by ngx-translate style runtimes)
NORMALIZATION_FORMAT_NGXTRANSLATE = "ngxtranslate"

DEFAULT_MAX_NESTING_DEPTH = 64
