"""
confsync — keep a live configuration folder and its git repository in step.

Push publishes local edits into the repository working copy, one
approved change at a time. Pull brings the repository up to date and
mirrors it back onto the live folder.
"""

import os

__version__ = "0.1.0"
__author__ = "smilinTux"

CONFIG_FILE = os.environ.get("CONFSYNC_CONFIG", "~/.confsync/config.yaml")
