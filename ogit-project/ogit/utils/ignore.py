# What it does: Implements the `.ogitignore` functionality
# How it does: Each raw pattern line is translated (wildcards, dots) into a compiled regular expression with fnmatch.translate.
#   The store directory name is always appended so the repository never snapshots itself
# What data structure it uses: List (of compiled patterns, checked in order)

import os
import re
from fnmatch import translate

from .repository import STORE_DIR

IGNORE_FILE = '.ogitignore'


def get_ignore_lines(repo_root):
    """
    Reads the .ogitignore file and returns its pattern lines, skipping blanks and comments.
    """
    ignore_file = os.path.join(repo_root, IGNORE_FILE)
    lines = []
    if os.path.exists(ignore_file):
        with open(ignore_file, 'r') as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith('#'):
                    lines.append(line)
    return lines


def compile_patterns(lines): # Turns raw pattern lines into matchers, plus the implicit store directory
    patterns = []
    for line in lines:
        line = line.rstrip('/') # "build/" names the directory "build"
        if line:
            patterns.append(re.compile(translate(line)))
    patterns.append(re.compile(re.escape(STORE_DIR)))
    return patterns


def load_patterns(repo_root):
    return compile_patterns(get_ignore_lines(repo_root))


def is_ignored(path, patterns): # Returns True if a pattern matches the relative path or any one of its components
    path = path.replace(os.sep, '/')
    parts = path.split('/')
    for pattern in patterns:
        if pattern.fullmatch(path) or any(pattern.fullmatch(part) for part in parts):
            return True
    return False
