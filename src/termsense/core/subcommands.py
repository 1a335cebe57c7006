"""Static subcommand table for multi-level CLI tools.

These sets are stable and rarely change, so they are hardcoded rather than
scraped from each tool's help output.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

SUBCOMMAND_TABLE: dict[str, tuple[str, ...]] = {
    "git": (
        "add", "bisect", "branch", "checkout", "cherry-pick", "clone", "commit",
        "diff", "fetch", "grep", "init", "log", "merge", "mv", "pull", "push",
        "rebase", "remote", "reset", "restore", "revert", "rm", "show", "stash",
        "status", "switch", "tag", "worktree",
    ),
    "npm": (
        "access", "adduser", "audit", "bugs", "cache", "ci", "completion",
        "config", "dedupe", "deprecate", "diff", "dist-tag", "docs", "doctor",
        "edit", "exec", "explain", "explore", "find-dupes", "fund", "help",
        "hook", "init", "install", "link", "ll", "login", "logout", "ls",
        "org", "outdated", "owner", "pack", "ping", "pkg", "prefix", "profile",
        "prune", "publish", "query", "rebuild", "repo", "restart", "root",
        "run", "search", "set", "shrinkwrap", "star", "stars", "start", "stop",
        "team", "test", "token", "uninstall", "unpublish", "unstar", "update",
        "version", "view", "whoami",
    ),
    "docker": (
        "attach", "build", "commit", "compose", "container", "context", "cp",
        "create", "diff", "events", "exec", "export", "history", "image",
        "images", "import", "info", "inspect", "kill", "load", "login", "logout",
        "logs", "manifest", "network", "node", "pause", "plugin", "port", "ps",
        "pull", "push", "rename", "restart", "rm", "rmi", "run", "save", "search",
        "secret", "service", "stack", "start", "stats", "stop", "swarm", "system",
        "tag", "top", "trust", "unpause", "update", "version", "volume", "wait",
    ),
    "kubectl": (
        "annotate", "api-resources", "api-versions", "apply", "attach", "auth",
        "autoscale", "certificate", "cluster-info", "completion", "config",
        "cordon", "cp", "create", "debug", "delete", "describe", "diff", "drain",
        "edit", "events", "exec", "explain", "expose", "get", "kustomize", "label",
        "logs", "patch", "plugin", "port-forward", "proxy", "replace", "rollout",
        "run", "scale", "set", "taint", "top", "uncordon", "version", "wait",
    ),
    "brew": (
        "analytics", "autoremove", "cask", "cleanup", "commands", "config",
        "deps", "desc", "doctor", "fetch", "formulae", "home", "info", "install",
        "leaves", "link", "list", "log", "migrate", "missing", "options",
        "outdated", "pin", "postinstall", "reinstall", "search", "services",
        "shellenv", "tap", "uninstall", "unlink", "unpin", "untap", "update",
        "upgrade", "uses",
    ),
    "yarn": (
        "add", "audit", "autoclean", "bin", "cache", "check", "config", "create",
        "dlx", "exec", "generate-lock-entry", "global", "help", "import", "info",
        "init", "install", "licenses", "link", "list", "login", "logout", "node",
        "outdated", "owner", "pack", "plugin", "policies", "publish", "rebuild",
        "remove", "run", "search", "set", "tag", "team", "unlink", "unplug",
        "upgrade", "upgrade-interactive", "version", "versions", "why", "workspace",
        "workspaces",
    ),
    "cargo": (
        "add", "bench", "build", "check", "clean", "clippy", "doc", "fetch",
        "fix", "fmt", "generate-lockfile", "help", "init", "install", "locate-project",
        "login", "logout", "metadata", "new", "owner", "package", "pkgid", "publish",
        "read-manifest", "remove", "report", "run", "rustc", "rustdoc", "search",
        "test", "tree", "uninstall", "update", "vendor", "verify-project", "version",
        "yank",
    ),
    "gh": (
        "api", "auth", "browse", "cache", "codespace", "completion", "config",
        "extension", "gist", "gpg-key", "issue", "label", "org", "pr", "project",
        "release", "repo", "ruleset", "run", "search", "secret", "ssh-key",
        "status", "variable", "workflow",
    ),
    "pnpm": (
        "add", "audit", "bin", "cache", "config", "create", "dedupe", "deploy",
        "dlx", "doctor", "env", "exec", "fetch", "import", "init", "install",
        "licenses", "link", "list", "outdated", "pack", "patch", "prune", "publish",
        "rebuild", "recursive", "remove", "root", "run", "server", "setup", "start",
        "store", "test", "unlink", "update", "why",
    ),
    # Prompt/theme tools are often shell functions rather than PATH executables.
    "p10k": ("configure", "reload", "display", "segment", "help"),
    "starship": (
        "bug-report", "completions", "config", "explain", "init", "module",
        "preset", "print-config", "prompt", "session", "time", "timings", "toggle",
    ),
    "oh-my-posh": (
        "cache", "config", "debug", "disable", "enable", "font", "get", "init",
        "notice", "print", "prompt", "toggle", "upgrade", "version",
    ),
}


class SubcommandRegistry:
    """Read-only, case-insensitive tool → subcommands lookup."""

    def __init__(self, table: Mapping[str, Iterable[str]] = SUBCOMMAND_TABLE) -> None:
        ordered = {
            tool.casefold(): tuple(dict.fromkeys(sub.casefold() for sub in subs)) for tool, subs in table.items()
        }
        # Typo ties resolve by iteration order, so keep the declared order next to the sets.
        self._ordered: Mapping[str, tuple[str, ...]] = MappingProxyType(ordered)
        self._table: Mapping[str, frozenset[str]] = MappingProxyType(
            {tool: frozenset(subs) for tool, subs in ordered.items()}
        )

    def command_has_subcommands(self, command: str) -> bool:
        return command.casefold() in self._table

    def has_valid_subcommand(self, command: str, subcommand: str) -> bool:
        subcommands = self._table.get(command.casefold())
        if subcommands is None:
            return False
        return subcommand.casefold() in subcommands

    def get_subcommands(self, command: str) -> frozenset[str] | None:
        return self._table.get(command.casefold())

    def ordered_subcommands(self, command: str) -> tuple[str, ...]:
        """Subcommands in declaration order; empty for unregistered tools."""
        return self._ordered.get(command.casefold(), ())


DEFAULT_SUBCOMMANDS = SubcommandRegistry()


def command_has_subcommands(command: str) -> bool:
    return DEFAULT_SUBCOMMANDS.command_has_subcommands(command)


def has_valid_subcommand(command: str, subcommand: str) -> bool:
    return DEFAULT_SUBCOMMANDS.has_valid_subcommand(command, subcommand)


def get_subcommands(command: str) -> frozenset[str] | None:
    return DEFAULT_SUBCOMMANDS.get_subcommands(command)
