# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env`. Only the switches below are read from this file.
"""

# Example: silence desktop notifications on a headless box
# NOTIFICATIONS_ENABLED = False

# Example: decode command output as UTF-8 instead of the Windows console code page
# COMMAND_ENCODING = "utf-8"
