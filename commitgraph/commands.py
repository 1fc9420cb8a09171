import json
import sys
import time
from os import getenv
from pathlib import Path
from typing import Callable

from .errors import CommandError, OperationOutcome
from .branching import branch as branch_op, checkout as checkout_op, delete_branch
from .commit_helpers import commit as commit_op, resolve_head_commit
from .graph_utils import first_parent_log
from .layout import compute_layout
from .merging import merge as merge_op, rebase as rebase_op
from .models import RepositoryState
from .repo_utils import init as init_state, load_demo_scenario, select_commit, toggle_theme
from .resetting import reset as reset_op
from .staging_helpers import stage_path, unstage_path
from .storage import load_or_init, save_state

DEFAULT_STATE_FILE = ".commitgraph.json"


def map_command(command: str) -> Callable:
    commandsMap = {
        "init": init,
        "demo": demo,
        "status": status,
        "log": log,
        "add": add,
        "rm": rm,
        "commit": commit,
        "branch": branch,
        "checkout": checkout,
        "merge": merge,
        "rebase": rebase,
        "reset": reset,
        "select": select,
        "theme": theme,
        "layout": layout,
    }
    if command not in commandsMap:
        raise CommandError(f"Unknown command: {command}")
    return commandsMap[command]


def state_path(args) -> Path:
    if getattr(args, "state", None):
        return Path(args.state)
    return Path(getenv("COMMITGRAPH_STATE", DEFAULT_STATE_FILE))


def apply(args, outcome: OperationOutcome) -> RepositoryState:
    """Save a successful outcome, or raise its reason."""
    new_state, result = outcome
    if not result.success:
        raise CommandError(result.error or "operation failed")
    save_state(state_path(args), new_state)
    return new_state


def describe_head(state: RepositoryState) -> str:
    current_branch = state.current_branch()
    if current_branch:
        return f"on branch '{current_branch}'"
    return f"HEAD detached at {state.head.ref}"


def init(args):
    path = state_path(args)
    if path.exists() and not args.force:
        raise CommandError(f"already initialized at {path}; use --force to start over")
    state = init_state()
    save_state(path, state)
    print(f"Initialized empty repository in {path}")


def demo(args):
    path = state_path(args)
    save_state(path, load_demo_scenario())
    print(f"Loaded demo scenario into {path}")


def status(args):
    state = load_or_init(state_path(args))
    print(f"Repository status: {describe_head(state)}")
    print(f"HEAD commit: {resolve_head_commit(state) or 'none'}")
    if state.stage.is_empty():
        print("No files staged.")
        return
    print("Staged files:")
    for kind, path in state.stage.entries():
        print(f" {kind[0].upper()} {path}")


def log(args):
    state = load_or_init(state_path(args))
    for commit_info in first_parent_log(state.commits, resolve_head_commit(state), args.number):
        print(f"Commit: {commit_info.id}")
        if commit_info.is_merge:
            print(f"Merge: {' '.join(commit_info.parents)}")
        print(f"Date: {time.ctime(commit_info.timestamp / 1000)}")
        print(f"\n    {commit_info.message}\n")


def add(args):
    state = load_or_init(state_path(args))
    apply(args, stage_path(state, args.path, args.status))
    print(f"Staged {args.path} as {args.status}.")


def rm(args):
    state = load_or_init(state_path(args))
    apply(args, unstage_path(state, args.path))
    print(f"Unstaged {args.path}.")


def commit(args):
    state = load_or_init(state_path(args))
    new_state = apply(args, commit_op(state, args.message))
    print(f"Committed as {resolve_head_commit(new_state)}")


def branch(args):
    state = load_or_init(state_path(args))
    if args.delete:
        apply(args, delete_branch(state, args.delete))
        print(f"Deleted branch '{args.delete}'.")
    elif args.create:
        apply(args, branch_op(state, args.create))
        print(f"Created branch '{args.create.strip()}'.")
    else:
        current_branch = state.current_branch()
        for branch_name, branch_info in state.branches.items():
            prefix = "*" if branch_name == current_branch else " "
            print(f"{prefix} {branch_name} {branch_info.head}")


def checkout(args):
    state = load_or_init(state_path(args))
    new_state = apply(args, checkout_op(state, args.name))
    print(f"Switched: {describe_head(new_state)}")


def merge(args):
    state = load_or_init(state_path(args))
    before = len(state.commits)
    new_state = apply(args, merge_op(state, args.name))
    kind = "fast-forward" if len(new_state.commits) == before else "merge commit"
    print(f"Merged branch '{args.name}' ({kind}), now at {resolve_head_commit(new_state)}.")


def rebase(args):
    state = load_or_init(state_path(args))
    before = len(state.commits)
    new_state = apply(args, rebase_op(state, args.name))
    print(f"Replayed {len(new_state.commits) - before} commits onto '{args.name}'.")


def reset(args):
    state = load_or_init(state_path(args))
    mode = "hard" if args.hard else "soft"
    new_state = apply(args, reset_op(state, mode))
    print(f"Reset ({mode}) to {resolve_head_commit(new_state)}")


def select(args):
    state = load_or_init(state_path(args))
    new_state = apply(args, select_commit(state, args.commit))
    print(f"Selected: {new_state.selected_commit_id or 'nothing'}")


def theme(args):
    state = load_or_init(state_path(args))
    new_state = apply(args, toggle_theme(state))
    print(f"Theme: {new_state.config.theme}")


def layout(args):
    state = load_or_init(state_path(args))
    result = compute_layout(state)
    json.dump(result.model_dump(by_alias=True), sys.stdout, indent=args.indent)
    print()
