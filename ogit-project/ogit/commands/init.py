# The command: ogit init
# What it does: Initializes a new, empty repository by creating the hidden `.ogit` directory
# How it does: The object store root is created; HEAD is left unset until the first commit. Running it twice is an error,
#   an existing repository is never merged into

import os
import sys

from ogit.utils import objects, repository
from ogit.utils.errors import OgitError


def run(args):
    try:
        store_root = init_repository(os.getcwd())
    except OgitError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Initialized empty ogit repository in {store_root}/")


def init_repository(repo_root):
    store_root = repository.store_path(repo_root)
    objects.init_store(store_root)
    return store_root
