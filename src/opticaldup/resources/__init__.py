"""Resource files and configuration templates."""


def get_default_config() -> str:
    """Return default configuration YAML content."""
    return """# opticaldup Configuration File

# Input/output tables (can be overridden by CLI arguments)
input_file: ~
output_file: ~

# Optical duplicate detection
detection:
  # Default: fast path for <instrument>:<lane>:<tile>:<x>:<y> style names.
  # Custom regexes need exactly three capture groups (tile, x, y).
  # Set to ~ to disable location extraction.
  read_name_regex: "[a-zA-Z0-9]+:[0-9]:([0-9]+):([0-9]+):([0-9]+).*"
  pixel_distance: 100

# Runtime settings
runtime:
  log_level: "WARNING"
  log_file: ~
  enable_progress: true

# Performance settings
performance:
  threads: 1
"""
