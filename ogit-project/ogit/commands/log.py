# The command: ogit log [<commit>]
# What it does: Displays the commit history by starting at HEAD (or the given commit) and walking backward through the parent links
# How it does: Reads each commit object, prints its id, author, date and indented message, then follows the first parent until the
#   root commit is reached
# What data structure it uses: A linear traversal up the parent chain of the commit DAG

import sys
import textwrap

from ogit.utils import commits, repository
from ogit.utils.errors import OgitError


def run(args):
    try:
        repo_root = repository.require_repo_root()
        store_root = repository.store_path(repo_root)
        if args.commit is None and repository.read_head(store_root) is None:
            print("fatal: your repository does not have any commits yet", file=sys.stderr)
            sys.exit(1)
        start = repository.resolve_object(store_root, args.commit or 'HEAD')

        for commit_hash, commit in commits.iter_history(store_root, start):
            print(format_commit(commit_hash, commit))
    except OgitError as e:
        print(f"fatal: {e}", file=sys.stderr)
        sys.exit(1)


def format_commit(commit_hash, commit):
    message = commit.message.decode(errors='replace').rstrip()
    lines = [
        f"commit {commit_hash}",
        f"Author: {commit.author.identity}",
        f"Date:   {commit.author.datetime.strftime('%c %z')}",
        "",
        textwrap.indent(message, '    '),
        "",
    ]
    return '\n'.join(lines)
