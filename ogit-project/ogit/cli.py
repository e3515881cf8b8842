import argparse
import logging

from ogit.commands import (
    init, config, hash_object, cat_file, write_tree,
    read_tree, commit_tree, commit, log, checkout
)

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


# The main entry point for the ogit version control system
def main(argv=None):
    # The main parser
    parser = argparse.ArgumentParser(prog="ogit", description="ogit: a minimal content-addressed version control system.")
    parser.add_argument("-d", "--debug", action="count", default=0, help="Show debug output (repeat for more).")
    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    # Command: init
    init_parser = subparsers.add_parser("init", help="Create an empty repository in the current directory.")
    init_parser.set_defaults(func=init.run)

    # Command: config
    config_parser = subparsers.add_parser("config", help="Set user name and email.")
    config_parser.add_argument("key", help="The configuration key (e.g., user.name).")
    config_parser.add_argument("value", help="The configuration value.")
    config_parser.set_defaults(func=config.run)

    # Command: hash-object
    hash_object_parser = subparsers.add_parser("hash-object", help="Store a file as a blob and print its id.")
    hash_object_parser.add_argument("file", help="The file to store.")
    hash_object_parser.set_defaults(func=hash_object.run)

    # Command: cat-file
    cat_file_parser = subparsers.add_parser("cat-file", help="Print the content of an object.")
    cat_file_parser.add_argument("-t", dest="type", action="store_true", help="Print the object type instead.")
    cat_file_parser.add_argument("object", help="The object id (or HEAD).")
    cat_file_parser.set_defaults(func=cat_file.run)

    # Command: write-tree
    write_tree_parser = subparsers.add_parser("write-tree", help="Create a tree object from a directory.")
    write_tree_parser.add_argument("directory", nargs="?", help="The directory to snapshot (default: repository root).")
    write_tree_parser.set_defaults(func=write_tree.run)

    # Command: read-tree
    read_tree_parser = subparsers.add_parser("read-tree", help="Replace the working directory with a tree object.")
    read_tree_parser.add_argument("tree", help="The tree id.")
    read_tree_parser.set_defaults(func=read_tree.run)

    # Command: commit-tree
    commit_tree_parser = subparsers.add_parser("commit-tree", help="Create a commit object from a tree.")
    commit_tree_parser.add_argument("tree", help="The tree id.")
    commit_tree_parser.add_argument("-p", dest="parent", action="append", help="A parent commit (repeatable).")
    commit_tree_parser.add_argument("-m", dest="message", help="The commit message (read from stdin if omitted).")
    commit_tree_parser.set_defaults(func=commit_tree.run)

    # Command: commit
    commit_parser = subparsers.add_parser("commit", help="Record the working directory as a new commit.")
    commit_parser.add_argument("-m", "--message", required=True, help="Commit message.")
    commit_parser.set_defaults(func=commit.run)

    # Command: log
    log_parser = subparsers.add_parser("log", help="Show commit logs.")
    log_parser.add_argument("commit", nargs="?", help="The commit to start from (default: HEAD).")
    log_parser.set_defaults(func=log.run)

    # Command: checkout
    checkout_parser = subparsers.add_parser("checkout", help="Restore the working directory to a commit and move HEAD.")
    checkout_parser.add_argument("commit", help="The commit to check out.")
    checkout_parser.set_defaults(func=checkout.run)

    # Parse the arguments
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVELS.get(args.debug, logging.DEBUG), format="%(levelname)s %(name)s: %(message)s")

    args.func(args)


if __name__ == "__main__":
    main()
