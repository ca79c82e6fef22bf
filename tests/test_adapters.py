"""Tests for the Claude Code, Cursor and Codex installer adapters."""

import json
from pathlib import Path

import pytest
import tomli

from ax.adapters import (
    AdapterNotFoundError,
    AdapterRegistry,
    ClaudeAdapter,
    CodexAdapter,
    CursorAdapter,
    InstallerAdapter,
    Target,
    download_skill_subdirectories,
    get_adapter,
    merge_json_servers,
    normalize_model,
)
from ax.core import BUILTIN_AGENTS, Agent, Identity, LocalSource, McpTool, RemoteSource, Skill
from ax.exceptions import AxError, ToolConfigParseError

RUST = BUILTIN_AGENTS["rust-architect"]


class FakeDownloader:
    """Serves a fixed set of URLs by writing their names as content."""

    def __init__(self, available: set[str]):
        self.available = available
        self.requested: list[str] = []

    def __call__(self, url: str, dest: Path) -> bool:
        self.requested.append(url)
        if url not in self.available:
            return False
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(url)
        return True


def _agent(**overrides) -> Agent:
    fields = dict(
        name="demo",
        version="1.0.0",
        description="Demo agent",
        author="me",
        identity=Identity(system_prompt="Prompt body"),
    )
    fields.update(overrides)
    return Agent(**fields)


class TestNormalizeModel:
    """Tests for model family normalization."""

    @pytest.mark.parametrize(
        "model,expected",
        [
            ("claude-3-5-sonnet-latest", "sonnet"),
            ("claude-3-opus-20240229", "opus"),
            ("claude-3-haiku", "haiku"),
            ("gpt-4o", "gpt-4o"),
            (None, "sonnet"),
        ],
    )
    def test_families(self, model, expected):
        """Test known families collapse and unknown models pass through."""
        assert normalize_model(model) == expected


class TestAdapterRegistry:
    """Tests for AdapterRegistry and get_adapter."""

    def setup_method(self):
        """Store registry state."""
        self._original_adapters = AdapterRegistry._adapters.copy()

    def teardown_method(self):
        """Restore registry state."""
        AdapterRegistry._adapters = self._original_adapters

    def test_all_targets_registered(self):
        """Test every Target has an adapter."""
        assert set(AdapterRegistry.all_names()) == {t.value for t in Target}

    @pytest.mark.parametrize(
        "target,cls", [(Target.CLAUDE, ClaudeAdapter), (Target.CURSOR, CursorAdapter), (Target.CODEX, CodexAdapter)]
    )
    def test_get_adapter(self, target, cls):
        """Test get_adapter builds the right class."""
        adapter = get_adapter(target)
        assert isinstance(adapter, cls)
        assert isinstance(adapter, InstallerAdapter)
        assert adapter.format.name == target.value

    def test_get_adapter_by_name(self):
        """Test get_adapter accepts a plain string."""
        assert isinstance(get_adapter("cursor", global_install=True), CursorAdapter)

    def test_unknown_adapter(self):
        """Test an unregistered name raises."""
        with pytest.raises(AdapterNotFoundError, match="Available"):
            AdapterRegistry.get("vim")

    def test_clear(self):
        """Test clearing the registry."""
        AdapterRegistry.clear()
        assert AdapterRegistry.all_names() == []

    def test_all_targets_support_separate_skill_files(self):
        """Test the skill policy flag of the built-in adapters."""
        for target in Target:
            assert get_adapter(target).format.supports_separate_skill_files


class TestScopeRoots:
    """Tests for project and global roots."""

    def test_claude_project_scope(self, fake_home):
        """Test the project scope uses ./.claude and ./.mcp.json."""
        adapter = ClaudeAdapter()
        assert adapter.root == Path.cwd() / ".claude"
        assert adapter.mcp_config_path == Path.cwd() / ".mcp.json"

    def test_cursor_project_scope(self, fake_home):
        """Test the project scope uses ./.cursor."""
        adapter = CursorAdapter()
        assert adapter.root == Path.cwd() / ".cursor"
        assert adapter.mcp_config_path == Path.cwd() / ".cursor" / "mcp.json"

    def test_codex_ignores_global(self, fake_home):
        """Test Codex always uses ~/.codex."""
        assert CodexAdapter(global_install=False).root == fake_home / ".codex"
        assert CodexAdapter(global_install=True).root == fake_home / ".codex"


class TestClaudeAdapter:
    """Tests for ClaudeAdapter."""

    @pytest.fixture
    def adapter(self, tmp_path: Path) -> ClaudeAdapter:
        return ClaudeAdapter(
            root=tmp_path / ".claude",
            mcp_config_path=tmp_path / ".mcp.json",
            downloader=FakeDownloader(set()),
        )

    def test_identity_document(self, adapter, tmp_path: Path):
        """Test agents/<name>.md has the expected frontmatter and prompt."""
        adapter.install_identity(RUST)
        text = (tmp_path / ".claude" / "agents" / "rust-architect.md").read_text(encoding="utf-8")

        header, body = text.split("\n---\n", 1)
        assert header.splitlines() == [
            "---",
            "name: rust-architect",
            "description: Senior Rust Systems Engineer optimized for Tokio & zero-cost abstractions",
            "model: sonnet",
            "icon: 🦀",
            "skills: tokio-patterns, error-handling",
        ]
        assert body == "\n" + RUST.identity.system_prompt

    def test_identity_defaults(self, adapter, tmp_path: Path):
        """Test default icon, default model and no skills line."""
        adapter.install_identity(_agent())
        text = (tmp_path / ".claude" / "agents" / "demo.md").read_text(encoding="utf-8")
        assert "model: sonnet\n" in text
        assert "icon: 🤖\n" in text
        assert "skills:" not in text

    def test_identity_is_byte_identical_on_rerun(self, adapter, tmp_path: Path):
        """Test reinstalling produces the same bytes."""
        path = tmp_path / ".claude" / "agents" / "rust-architect.md"
        adapter.install_identity(RUST)
        first = path.read_bytes()
        adapter.install_identity(RUST)
        assert path.read_bytes() == first

    def test_skills_written_as_directories(self, adapter, tmp_path: Path):
        """Test each skill becomes skills/<name>/SKILL.md."""
        adapter.install_skills(RUST)
        skills = tmp_path / ".claude" / "skills"
        assert sorted(p.name for p in skills.iterdir()) == ["error-handling", "tokio-patterns"]
        text = (skills / "tokio-patterns" / "SKILL.md").read_text(encoding="utf-8")
        assert text.startswith("---\nname: tokio-patterns\n")
        assert text.endswith(RUST.skills[0].content)

    def test_local_skill_subdirectories_copied(self, adapter, tmp_path: Path):
        """Test scripts/, references/ and assets/ are copied from a local skill."""
        source = tmp_path / "src-skill"
        (source / "scripts").mkdir(parents=True)
        (source / "scripts" / "run.sh").write_text("echo hi")
        (source / "references" / "deep").mkdir(parents=True)
        (source / "references" / "deep" / "notes.md").write_text("notes")
        (source / "other").mkdir()

        skill = Skill(name="local", content="Body", source=LocalSource(source))
        adapter.install_skills(_agent(skills=(skill,)))

        dest = tmp_path / ".claude" / "skills" / "local"
        assert (dest / "scripts" / "run.sh").read_text() == "echo hi"
        assert (dest / "references" / "deep" / "notes.md").read_text() == "notes"
        assert not (dest / "assets").exists()
        assert not (dest / "other").exists()

    def test_tools_merged_with_stdio_type(self, adapter, tmp_path: Path):
        """Test the MCP entry shape and that unrelated keys survive."""
        config_path = tmp_path / ".mcp.json"
        config_path.write_text(json.dumps({"theme": "dark", "mcpServers": {"other": {"command": "x"}}}))

        adapter.install_tools(RUST)

        config = json.loads(config_path.read_text())
        assert config["theme"] == "dark"
        assert config["mcpServers"]["other"] == {"command": "x"}
        assert config["mcpServers"]["context7"] == {
            "type": "stdio",
            "command": "npx",
            "args": ["-y", "@upstash/context7-mcp"],
            "env": {"CONTEXT7_API_KEY": "${CONTEXT7_API_KEY}"},
        }

    def test_tools_noop_without_mcp(self, adapter, tmp_path: Path):
        """Test no tool config is created for an agent without tools."""
        adapter.install_tools(_agent())
        assert not (tmp_path / ".mcp.json").exists()

    def test_uninstall_removes_identity_and_listed_skills(self, adapter, tmp_path: Path):
        """Test uninstall removes what install wrote, except tool config."""
        adapter.install_identity(RUST)
        adapter.install_skills(RUST)
        adapter.install_tools(RUST)
        unrelated = tmp_path / ".claude" / "skills" / "unrelated"
        unrelated.mkdir()

        adapter.uninstall("rust-architect")

        assert not (tmp_path / ".claude" / "agents" / "rust-architect.md").exists()
        assert not (tmp_path / ".claude" / "skills" / "tokio-patterns").exists()
        assert not (tmp_path / ".claude" / "skills" / "error-handling").exists()
        assert unrelated.exists()
        assert "context7" in json.loads((tmp_path / ".mcp.json").read_text())["mcpServers"]

    def test_uninstall_missing_agent_is_noop(self, adapter):
        """Test uninstalling something never installed does not fail."""
        adapter.uninstall("ghost")


class TestCursorAdapter:
    """Tests for CursorAdapter."""

    @pytest.fixture
    def adapter(self, tmp_path: Path) -> CursorAdapter:
        return CursorAdapter(root=tmp_path / ".cursor")

    def test_identity_rule(self, adapter, tmp_path: Path):
        """Test the identity MDC document."""
        adapter.install_identity(RUST)
        text = (tmp_path / ".cursor" / "rules" / "rust-architect-identity.mdc").read_text(encoding="utf-8")
        assert text == (
            "---\n"
            "description: Senior Rust Systems Engineer optimized for Tokio & zero-cost abstractions\n"
            "globs: \n"
            "alwaysApply: true\n"
            "---\n"
            "\n"
            "# 🦀 rust-architect Agent\n"
            "\n"
            f"{RUST.identity.system_prompt}\n"
        )

    def test_skill_rules(self, adapter, tmp_path: Path):
        """Test one rule file per skill, prefixed with the agent name."""
        adapter.install_skills(RUST)
        rules = tmp_path / ".cursor" / "rules"
        assert sorted(p.name for p in rules.iterdir()) == [
            "rust-architect-error-handling.mdc",
            "rust-architect-tokio-patterns.mdc",
        ]
        text = (rules / "rust-architect-tokio-patterns.mdc").read_text(encoding="utf-8")
        assert "# rust-architect - tokio-patterns\n" in text

    def test_skill_rule_default_description(self, adapter, tmp_path: Path):
        """Test the description used for skills without one."""
        adapter.install_skills(_agent(skills=(Skill(name="s", content="Body"),)))
        text = (tmp_path / ".cursor" / "rules" / "demo-s.mdc").read_text(encoding="utf-8")
        assert "description: Knowledge base for demo agent\n" in text

    def test_skill_named_identity_rejected(self, adapter, tmp_path: Path):
        """Test a skill cannot take over the identity rule file."""
        agent = _agent(skills=(Skill(name="identity", content="Body"),))
        with pytest.raises(AxError, match="would overwrite its identity rule"):
            adapter.install_identity(agent)
        with pytest.raises(AxError, match="would overwrite its identity rule"):
            adapter.install_skills(agent)
        assert not (tmp_path / ".cursor" / "rules").exists()

    def test_tools_have_no_type(self, adapter, tmp_path: Path):
        """Test Cursor entries omit the stdio type."""
        adapter.install_tools(RUST)
        config = json.loads((tmp_path / ".cursor" / "mcp.json").read_text())
        assert config["mcpServers"]["context7"] == {
            "command": "npx",
            "args": ["-y", "@upstash/context7-mcp"],
            "env": {"CONTEXT7_API_KEY": "${CONTEXT7_API_KEY}"},
        }

    def test_uninstall_removes_prefixed_rules(self, adapter, tmp_path: Path):
        """Test uninstall removes identity and skill rules only."""
        adapter.install_identity(RUST)
        adapter.install_skills(RUST)
        adapter.install_tools(RUST)
        keep = tmp_path / ".cursor" / "rules" / "other-identity.mdc"
        keep.write_text("x")

        adapter.uninstall("rust-architect")

        rules = tmp_path / ".cursor" / "rules"
        assert [p.name for p in rules.iterdir()] == ["other-identity.mdc"]
        assert (tmp_path / ".cursor" / "mcp.json").exists()


class TestCodexAdapter:
    """Tests for CodexAdapter."""

    @pytest.fixture
    def downloader(self) -> FakeDownloader:
        return FakeDownloader({
            "https://r.test/clean/scripts/main.py",
            "https://r.test/clean/references/REFERENCE.md",
        })

    @pytest.fixture
    def adapter(self, tmp_path: Path, downloader) -> CodexAdapter:
        return CodexAdapter(root=tmp_path / ".codex", downloader=downloader)

    def test_identity_is_noop(self, adapter, tmp_path: Path):
        """Test Codex writes nothing for the identity."""
        adapter.install_identity(RUST)
        assert not (tmp_path / ".codex").exists()
        assert not adapter.format.supports_identity

    def test_skills_use_skill_standard(self, adapter, tmp_path: Path):
        """Test skills land in ~/.codex/skills/<name>/SKILL.md."""
        adapter.install_skills(RUST)
        text = (tmp_path / ".codex" / "skills" / "error-handling" / "SKILL.md").read_text(encoding="utf-8")
        assert text.startswith("---\nname: error-handling\ndescription: ")

    def test_remote_subdirectories_downloaded(self, adapter, downloader, tmp_path: Path):
        """Test only subdirectories with a downloaded file are created."""
        skill = Skill(name="clean", content="Body", source=RemoteSource("https://r.test/clean"))
        adapter.install_skills(_agent(skills=(skill,)))

        dest = tmp_path / ".codex" / "skills" / "clean"
        assert (dest / "scripts" / "main.py").exists()
        assert (dest / "references" / "REFERENCE.md").exists()
        assert not (dest / "assets").exists()
        assert "https://r.test/clean/assets/template.json" in downloader.requested

    def test_tools_appended_as_toml(self, adapter, tmp_path: Path):
        """Test the mcp_servers section parses with the expected values."""
        config_path = tmp_path / ".codex" / "config.toml"
        config_path.parent.mkdir(parents=True)
        config_path.write_text('model = "o3"\n')

        adapter.install_tools(RUST)

        text = config_path.read_text()
        assert "[mcp_servers.context7]" in text
        data = tomli.loads(text)
        assert data["model"] == "o3"
        assert data["mcp_servers"]["context7"] == {
            "command": "npx",
            "args": ["-y", "@upstash/context7-mcp"],
            "env": {"CONTEXT7_API_KEY": "${CONTEXT7_API_KEY}"},
        }

    def test_existing_section_not_duplicated(self, adapter, tmp_path: Path):
        """Test a second install leaves the config byte-identical."""
        adapter.install_tools(RUST)
        config_path = tmp_path / ".codex" / "config.toml"
        first = config_path.read_bytes()

        adapter.install_tools(RUST)

        assert config_path.read_bytes() == first
        assert config_path.read_text().count("[mcp_servers.context7]") == 1

    def test_hand_edited_section_kept(self, adapter, tmp_path: Path):
        """Test an existing section with other values is not replaced."""
        config_path = tmp_path / ".codex" / "config.toml"
        config_path.parent.mkdir(parents=True)
        config_path.write_text('[mcp_servers.context7]\ncommand = "bunx"\n')

        adapter.install_tools(RUST)

        assert tomli.loads(config_path.read_text())["mcp_servers"]["context7"]["command"] == "bunx"

    def test_tool_without_args_or_env(self, adapter, tmp_path: Path):
        """Test a bare command renders only the command key."""
        adapter.install_tools(_agent(mcp=(McpTool(name="bare", command="bare-mcp"),)))
        data = tomli.loads((tmp_path / ".codex" / "config.toml").read_text())
        assert data["mcp_servers"]["bare"] == {"command": "bare-mcp"}

    def test_skills_record_owner(self, adapter, tmp_path: Path):
        """Test each SKILL.md names the agent that installed it."""
        adapter.install_skills(RUST)
        text = (tmp_path / ".codex" / "skills" / "tokio-patterns" / "SKILL.md").read_text(encoding="utf-8")
        assert "metadata:\n  agent: rust-architect\n" in text

    def test_uninstall_removes_owned_skills(self, adapter, tmp_path: Path):
        """Test uninstall removes every skill of the agent and nothing else."""
        skills = tmp_path / ".codex" / "skills"
        adapter.install_skills(RUST)
        adapter.install_skills(_agent(name="other", skills=(Skill(name="keep", content="Body"),)))
        (skills / "hand-made").mkdir()
        (skills / "hand-made" / "SKILL.md").write_text("# Mine")

        adapter.uninstall("rust-architect")

        assert sorted(p.name for p in skills.iterdir()) == ["hand-made", "keep"]

    def test_uninstall_removes_skill_named_after_agent(self, adapter, tmp_path: Path):
        """Test a standalone skill installed under the agent name is removed."""
        skill = Skill(name="clean", content="Body")
        adapter.install_skills(_agent(name="clean", skills=(skill,)))
        adapter.uninstall("clean")
        assert not (tmp_path / ".codex" / "skills" / "clean").exists()

    def test_uninstall_without_skills_dir_is_noop(self, adapter):
        """Test uninstall before any install does nothing."""
        adapter.uninstall("rust-architect")


class TestMergeJsonServers:
    """Tests for the shared JSON merge helper."""

    def test_creates_document(self, tmp_path: Path):
        """Test a missing document is created with parents."""
        path = tmp_path / "nested" / "mcp.json"
        merge_json_servers(path, "mcpServers", {"a": {"command": "a"}})
        assert json.loads(path.read_text()) == {"mcpServers": {"a": {"command": "a"}}}

    def test_overwrites_same_name_only(self, tmp_path: Path):
        """Test same-named entries are replaced and others kept."""
        path = tmp_path / "mcp.json"
        path.write_text(json.dumps({"mcpServers": {"A": {"command": "old"}, "B": {"command": "b"}}}))
        merge_json_servers(path, "mcpServers", {"A": {"command": "new"}})
        assert json.loads(path.read_text())["mcpServers"] == {
            "A": {"command": "new"},
            "B": {"command": "b"},
        }

    def test_invalid_json_raises_and_keeps_file(self, tmp_path: Path):
        """Test an unparseable document is left untouched."""
        path = tmp_path / "mcp.json"
        path.write_text("{not json")
        with pytest.raises(ToolConfigParseError):
            merge_json_servers(path, "mcpServers", {"a": {}})
        assert path.read_text() == "{not json"

    def test_non_object_servers_key_raises(self, tmp_path: Path):
        """Test a servers key that is not an object is rejected."""
        path = tmp_path / "mcp.json"
        path.write_text(json.dumps({"mcpServers": []}))
        with pytest.raises(ToolConfigParseError):
            merge_json_servers(path, "mcpServers", {"a": {}})

    def test_empty_file_treated_as_new(self, tmp_path: Path):
        """Test a zero-byte document is treated as empty."""
        path = tmp_path / "mcp.json"
        path.write_text("")
        merge_json_servers(path, "mcpServers", {"a": {"command": "a"}})
        assert "a" in json.loads(path.read_text())["mcpServers"]


class TestDownloadSkillSubdirectories:
    """Tests for remote asset probing."""

    def test_counts_and_skips(self, tmp_path: Path):
        """Test absent candidates are skipped and counted files returned."""
        downloader = FakeDownloader({"https://r.test/s/assets/template.json"})
        written = download_skill_subdirectories("https://r.test/s", tmp_path, downloader)
        assert written == 1
        assert [p.name for p in tmp_path.iterdir()] == ["assets"]
        assert len(downloader.requested) == 12
