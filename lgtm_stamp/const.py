VERSION = "0.3.0"

#--------------
# Stamp defaults
#--------------

DEFAULT_TEXT = "LGTM"
DEFAULT_COLOR = "#FFFFFF"
DEFAULT_FONT_SIZE = 200

# Literal accepted for x/y meaning "center on this axis"
AUTO = "auto"

# Inserted before the source extension when no output path is given
OUTPUT_SUFFIX = "_out"

# Environment variable naming a YAML config file
CONFIG_ENV = "LGTM_STAMP_CONFIG"
