import sys

import argparse
from commitgraph.commands import map_command
from commitgraph.errors import GraphError
from commitgraph.log_helpers import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Commit graph simulator CLI")
    parser.add_argument("--state", help="Path of the JSON state file (default: $COMMITGRAPH_STATE or .commitgraph.json)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # init command
    init_parser = subparsers.add_parser("init", help="Initialize a new repository")
    init_parser.add_argument("-f", "--force", action="store_true", help="Overwrite an existing state file")

    # demo command
    subparsers.add_parser("demo", help="Load the demo scenario (main and feature diverged)")

    # status command
    subparsers.add_parser("status", help="Show HEAD and the stage")

    # log command
    log_parser = subparsers.add_parser("log", help="Show first-parent history from HEAD")
    log_parser.add_argument("-n", "--number", type=int, default=None, help="Number of commits to show")

    # add command
    add_parser = subparsers.add_parser("add", help="Stage a symbolic path")
    add_parser.add_argument("path", help="Path to stage")
    add_parser.add_argument("-s", "--status", choices=["added", "modified", "deleted"], default="added")

    # rm command
    rm_parser = subparsers.add_parser("rm", help="Remove a path from the stage")
    rm_parser.add_argument("path", help="Path to unstage")

    # commit command
    commit_parser = subparsers.add_parser("commit", help="Commit on HEAD")
    commit_parser.add_argument("-m", "--message", required=True, help="Commit message")

    # branch command
    branch_parser = subparsers.add_parser("branch", help="Manage branches")
    branch_parser.add_argument("-c", "--create", required=False, metavar="BRANCH_NAME", help="Create a new branch")
    branch_parser.add_argument("-d", "--delete", required=False, metavar="BRANCH_NAME", help="Delete the specified branch")
    branch_parser.add_argument("-l", "--list", action="store_true", help="List all branches")

    # checkout command
    checkout_parser = subparsers.add_parser("checkout", help="Checkout a branch or commit")
    checkout_parser.add_argument("name", help="Branch name or commit id (prefix allowed)")

    # merge command
    merge_parser = subparsers.add_parser("merge", help="Merge a branch into the current branch")
    merge_parser.add_argument("name", help="Branch name to merge from")

    # rebase command
    rebase_parser = subparsers.add_parser("rebase", help="Replay the current branch onto another branch")
    rebase_parser.add_argument("name", help="Branch name to rebase onto")

    # reset command
    reset_parser = subparsers.add_parser("reset", help="Move the current branch back one commit")
    mode_group = reset_parser.add_mutually_exclusive_group()
    mode_group.add_argument("--soft", action="store_true", help="Keep the stage (default)")
    mode_group.add_argument("--hard", action="store_true", help="Clear the stage")

    # select command
    select_parser = subparsers.add_parser("select", help="Select a commit for inspection")
    select_parser.add_argument("commit", nargs="?", default=None, help="Commit id; omit to clear")

    # theme command
    subparsers.add_parser("theme", help="Toggle between dark and light theme")

    # layout command
    layout_parser = subparsers.add_parser("layout", help="Print the computed graph layout as JSON")
    layout_parser.add_argument("--indent", type=int, default=2, help="JSON indentation")

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    try:
        map_command(args.command)(args)
    except GraphError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
