from termsense.core.subcommands import (
    DEFAULT_SUBCOMMANDS,
    SubcommandRegistry,
    command_has_subcommands,
    get_subcommands,
    has_valid_subcommand,
)


def test_known_subcommands() -> None:
    assert has_valid_subcommand("git", "status") is True
    assert has_valid_subcommand("git", "help") is False
    assert has_valid_subcommand("kubectl", "port-forward") is True


def test_lookups_are_case_insensitive() -> None:
    assert command_has_subcommands("GIT")
    assert has_valid_subcommand("Docker", "PS")


def test_unregistered_tool() -> None:
    assert command_has_subcommands("ls") is False
    assert has_valid_subcommand("ls", "status") is False
    assert get_subcommands("ls") is None


def test_prompt_tools_are_registered() -> None:
    for tool in ("p10k", "starship", "oh-my-posh"):
        assert command_has_subcommands(tool)


def test_get_subcommands_is_immutable() -> None:
    subcommands = get_subcommands("npm")
    assert isinstance(subcommands, frozenset)
    assert "install" in subcommands


def test_custom_table_keeps_declared_order() -> None:
    registry = SubcommandRegistry({"Tool": ["Zeta", "alpha", "zeta"]})
    assert registry.ordered_subcommands("tool") == ("zeta", "alpha")
    assert registry.ordered_subcommands("other") == ()
    assert registry.command_has_subcommands("TOOL")
    assert not registry.command_has_subcommands("git")


def test_default_registry_covers_table() -> None:
    expected = {"git", "npm", "docker", "kubectl", "brew", "yarn", "cargo", "gh", "pnpm"}
    assert all(DEFAULT_SUBCOMMANDS.command_has_subcommands(tool) for tool in expected)
