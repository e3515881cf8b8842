# The command: ogit config <key> <value>

import sys

from ogit.utils import config, repository
from ogit.utils.errors import OgitError


def run(args):
    try:
        repo_root = repository.require_repo_root()
        config.write_config(repo_root, args.key, args.value)
    except (OgitError, ValueError) as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)
