"""
Unit tests for core modules: language detection, ChangeDescriber,
heuristic messages, PromptBuilder, Config.

Run with:
    pytest tests/test_core.py -v
"""

import json

import pytest

from cmsg.changes import ChangeKind, ChangeRecord, describe_changes, detect_language
from cmsg.config import Config, ConfigManager, resolve_api_keys
from cmsg.prompts import PromptBuilder, build_changes_summary
from cmsg.synth import generate_heuristic_message, file_stem


def change(path, kind=ChangeKind.MODIFIED, language=None, description=None):
    return ChangeRecord(
        file_path=path,
        description=description or f"Modified {path}",
        change_kind=kind,
        language=language,
    )


# ---------------------------------------------------------------------------
# Language detection
# ---------------------------------------------------------------------------

class TestDetectLanguage:

    @pytest.mark.parametrize("path, expected", [
        ("src/app.ts", "typescript"),
        ("src/App.tsx", "typescript"),
        ("index.js", "javascript"),
        ("components/Nav.jsx", "javascript"),
        ("cmsg/cli/main.py", "python"),
        ("src/Main.java", "java"),
        ("engine.cpp", "cpp"),
        ("kernel.c", "c"),
        ("Program.cs", "csharp"),
        ("index.php", "php"),
        ("app/models/user.rb", "ruby"),
        ("src/main.go", "go"),
        ("src/lib.rs", "rust"),
        ("View.swift", "swift"),
        ("Main.kt", "kotlin"),
        ("Job.scala", "scala"),
        ("index.html", "html"),
        ("site.css", "css"),
        ("theme.scss", "scss"),
        ("vars.less", "less"),
        ("package.json", "json"),
        ("pom.xml", "xml"),
        ("ci.yaml", "yaml"),
        ("docker-compose.yml", "yaml"),
        ("README.md", "markdown"),
    ])
    def test_known_extensions(self, path, expected):
        assert detect_language(path) == expected

    def test_extension_is_case_insensitive(self):
        assert detect_language("LEGACY.PY") == "python"

    @pytest.mark.parametrize("path", [
        "Makefile",
        ".gitignore",
        "notes.txt",
        "pyproject.toml",
        "archive.tar.gz",
    ])
    def test_unlisted_extensions(self, path):
        assert detect_language(path) is None


# ---------------------------------------------------------------------------
# ChangeDescriber
# ---------------------------------------------------------------------------

class TestDescribeTypeScript:

    def test_classes_outrank_functions(self):
        content = "class Foo {}\n\nfunction bar() {\n  return 1;\n}\n"
        assert describe_changes(content, "src/foo.ts", "typescript") == "Updated src/foo.ts - classes: Foo"

    def test_multiple_classes_in_order(self):
        content = "export class Router {}\nclass Route extends Base {}\n"
        assert describe_changes(content, "router.ts", "typescript") == "Updated router.ts - classes: Router, Route"

    def test_function_declarations_and_assignments(self):
        content = (
            "import { api } from './api';\n"
            "function load() {}\n"
            "const save = async (item) => api.post(item);\n"
        )
        assert describe_changes(content, "store.js", "javascript") == "Updated store.js - functions: load, save"

    def test_object_method_pattern(self):
        content = "module.exports = {\n  start: (port) => listen(port),\n};\n"
        assert describe_changes(content, "server.js", "javascript") == "Updated server.js - functions: start"

    def test_imports_only(self):
        content = "import { x } from 'y';\nexport default x;\n"
        assert describe_changes(content, "index.ts", "typescript") == "Updated index.ts - added imports"

    def test_line_count_fallback(self):
        content = "const a = 1;\nconst b = 2;"
        assert describe_changes(content, "consts.ts", "typescript") == "Updated consts.ts (2 lines)"


class TestDescribePython:

    def test_classes_outrank_functions_and_imports(self):
        content = "import os\n\nclass Parser:\n    def parse(self):\n        pass\n"
        assert describe_changes(content, "parser.py", "python") == "Updated parser.py - classes: Parser"

    def test_functions(self):
        content = "def main():\n    pass\n\ndef helper(x):\n    return x\n"
        assert describe_changes(content, "cli.py", "python") == "Updated cli.py - functions: main, helper"

    @pytest.mark.parametrize("content", [
        "import os\nprint(os.sep)\n",
        "from os import path\nprint(path)\n",
    ])
    def test_imports_only(self, content):
        assert describe_changes(content, "run.py", "python") == "Updated run.py - added imports"

    def test_line_count_fallback(self):
        assert describe_changes("x = 1\ny = 2\nz = 3\n", "vals.py", "python") == "Updated vals.py (4 lines)"

    def test_class_word_inside_string_counts(self):
        content = 'MESSAGE = "class Widget is deprecated"\n'
        assert describe_changes(content, "warn.py", "python") == "Updated warn.py - classes: Widget"


class TestDescribeJava:

    def test_classes_outrank_methods(self):
        content = "public class App {\n    public static void main(String[] args) {}\n}\n"
        assert describe_changes(content, "App.java", "java") == "Updated App.java - classes: App"

    def test_methods_use_methods_label(self):
        content = "interface Service {\n    public String name();\n    int size();\n}\n"
        assert describe_changes(content, "Service.java", "java") == "Updated Service.java - methods: name, size"

    def test_imports_only(self):
        content = "import java.util.List;\n"
        assert describe_changes(content, "Types.java", "java") == "Updated Types.java - added imports"


class TestDescribeOtherLanguages:

    @pytest.mark.parametrize("language", ["go", "rust", "markdown", None])
    def test_skips_scanning(self, language):
        content = "class Foo\nfunc main() {}\nimport x"
        assert describe_changes(content, "file.x", language) == "Updated file.x (3 lines)"

    def test_empty_content_counts_one_line(self):
        assert describe_changes("", "empty.go", "go") == "Updated empty.go (1 lines)"

    def test_is_deterministic(self):
        content = "class A:\n    pass\n"
        first = describe_changes(content, "a.py", "python")
        assert all(describe_changes(content, "a.py", "python") == first for _ in range(3))


# ---------------------------------------------------------------------------
# Heuristic messages
# ---------------------------------------------------------------------------

class TestFileStem:

    @pytest.mark.parametrize("path, expected", [
        ("src/main.go", "main"),
        ("README.md", "README"),
        ("Makefile", "Makefile"),
        ("src/utils.test.ts", "utils"),
        (".gitignore", "file"),
        ("", "file"),
    ])
    def test_stem(self, path, expected):
        assert file_stem(path) == expected


class TestHeuristicSingleChange:

    def test_empty_list(self):
        assert generate_heuristic_message([]) == "chore: update code"

    def test_added_with_language(self):
        changes = [change("src/main.go", ChangeKind.ADDED, "go")]
        assert generate_heuristic_message(changes) == "feat(go): add main"

    @pytest.mark.parametrize("kind, expected", [
        (ChangeKind.ADDED, "feat: add Makefile"),
        (ChangeKind.DELETED, "chore: remove Makefile"),
        (ChangeKind.RENAMED, "refactor: rename Makefile"),
        (ChangeKind.MODIFIED, "fix: update Makefile"),
    ])
    def test_without_language(self, kind, expected):
        assert generate_heuristic_message([change("Makefile", kind)]) == expected

    @pytest.mark.parametrize("kind, expected", [
        (ChangeKind.DELETED, "chore(python): remove legacy"),
        (ChangeKind.RENAMED, "refactor(python): rename legacy"),
        (ChangeKind.MODIFIED, "fix(python): update legacy"),
    ])
    def test_with_language(self, kind, expected):
        assert generate_heuristic_message([change("pkg/legacy.py", kind, "python")]) == expected

    def test_unrecognized_kind_treated_as_modified(self):
        record = change("src/app.rb", "copied", "ruby")
        assert generate_heuristic_message([record]) == "fix(ruby): update app"

    def test_plain_string_kinds(self):
        assert generate_heuristic_message([change("a.py", "added", "python")]) == "feat(python): add a"


class TestHeuristicMultipleChanges:

    def test_added_and_modified_same_language(self):
        changes = [
            change("src/a.ts", ChangeKind.ADDED, "typescript"),
            change("src/b.ts", ChangeKind.MODIFIED, "typescript"),
        ]
        assert generate_heuristic_message(changes) == "feat(typescript): add new features and update existing code"

    def test_added_and_modified_mixed_languages(self):
        changes = [
            change("src/a.ts", ChangeKind.ADDED, "typescript"),
            change("src/b.py", ChangeKind.MODIFIED, "python"),
        ]
        assert generate_heuristic_message(changes) == "feat: add new features and update existing code"

    def test_unlanguaged_records_do_not_break_single_language(self):
        changes = [
            change("src/a.py", ChangeKind.ADDED, "python"),
            change("Makefile", ChangeKind.MODIFIED),
        ]
        assert generate_heuristic_message(changes) == "feat(python): add new features and update existing code"

    def test_added_and_modified_beats_deleted(self):
        changes = [
            change("a.py", ChangeKind.ADDED),
            change("b.py", ChangeKind.MODIFIED),
            change("c.py", ChangeKind.DELETED),
        ]
        assert generate_heuristic_message(changes).startswith("feat")

    def test_deleted_without_modified(self):
        changes = [change("a.py", ChangeKind.DELETED), change("b.py", ChangeKind.ADDED)]
        assert generate_heuristic_message(changes) == "chore: remove unused files"

    def test_deleted_with_modified(self):
        changes = [change("a.py", ChangeKind.DELETED), change("b.py", ChangeKind.MODIFIED)]
        assert generate_heuristic_message(changes) == "refactor: restructure and remove unused code"

    def test_deleted_beats_renamed(self):
        changes = [change("a.py", ChangeKind.DELETED), change("b.py", ChangeKind.RENAMED)]
        assert generate_heuristic_message(changes) == "chore: remove unused files"

    def test_renamed(self):
        changes = [change("a.py", ChangeKind.RENAMED), change("b.py", ChangeKind.MODIFIED)]
        assert generate_heuristic_message(changes) == "refactor: reorganize file structure"

    def test_only_added_falls_to_default(self):
        changes = [change("a.go", ChangeKind.ADDED, "go"), change("b.go", ChangeKind.ADDED, "go")]
        assert generate_heuristic_message(changes) == "fix(go): resolve issues and improve code"

    def test_modified_single_language(self):
        changes = [change("a.rs", language="rust"), change("b.rs", language="rust")]
        assert generate_heuristic_message(changes) == "fix(rust): resolve issues and improve code"

    def test_modified_mixed_languages(self):
        changes = [change("a.rs", language="rust"), change("b.go", language="go")]
        assert generate_heuristic_message(changes) == "fix: resolve issues and improve code"

    def test_modified_no_languages(self):
        changes = [change("Makefile"), change("LICENSE")]
        assert generate_heuristic_message(changes) == "fix: resolve issues and improve code"


# ---------------------------------------------------------------------------
# PromptBuilder
# ---------------------------------------------------------------------------

class TestPromptBuilder:

    @pytest.fixture
    def changes(self):
        return [
            change("src/app.py", ChangeKind.ADDED, "python", "Updated src/app.py - classes: App"),
            change("old.py", ChangeKind.DELETED, "python", "Deleted old.py"),
        ]

    def test_changes_summary(self, changes):
        assert build_changes_summary(changes) == (
            "- added: Updated src/app.py - classes: App\n"
            "- deleted: Deleted old.py"
        )

    def test_empty_summary(self):
        assert build_changes_summary([]) == ""

    def test_prompt_embeds_summary(self, changes):
        prompt = PromptBuilder().build(changes)
        assert "Changes:\n- added: Updated src/app.py - classes: App\n- deleted: Deleted old.py" in prompt

    def test_prompt_rules(self, changes):
        prompt = PromptBuilder().build(changes)
        assert "<type>(<scope>): <description>" in prompt
        assert "feat, fix, docs, style, refactor, test, chore, etc." in prompt
        assert "under 50 characters" in prompt
        assert "imperative mood" in prompt
        assert prompt.rstrip().endswith("no additional text:")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.provider == "auto"
        assert config.model is None
        assert config.timeout == 30
        assert config.max_file_display == 8

    def test_to_dict_excludes_none(self):
        d = Config().to_dict()
        assert "model" not in d
        assert "api_key" not in d
        assert "provider" in d

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"provider": "openai", "unknown_key": "value"})
        assert config.provider == "openai"
        assert not hasattr(config, "unknown_key")

    def test_validate_invalid_provider(self):
        config = Config(provider="gpt4")
        warnings = config.validate()
        assert len(warnings) == 1
        assert config.provider == "auto"

    def test_validate_invalid_timeout(self):
        config = Config(timeout=0)
        warnings = config.validate()
        assert any("timeout" in w for w in warnings)
        assert config.timeout == 30

    def test_validate_valid_config_no_warnings(self):
        assert Config().validate() == []

    def test_from_dict_triggers_validation(self, capsys):
        Config.from_dict({"provider": "invalid"})
        err = capsys.readouterr().err
        assert "Config warning" in err


class TestResolveApiKeys:

    def test_reads_environment(self):
        env = {"ANTHROPIC_API_KEY": "ant-key", "OPENAI_API_KEY": "oai-key"}
        assert resolve_api_keys(Config(), env) == {"claude": "ant-key", "openai": "oai-key"}

    def test_config_key_applies_to_configured_provider(self):
        config = Config(provider="openai", api_key="file-key")
        env = {"OPENAI_API_KEY": "env-key", "ANTHROPIC_API_KEY": "ant-key"}
        assert resolve_api_keys(config, env) == {"claude": "ant-key", "openai": "file-key"}

    def test_config_key_applies_to_all_for_auto(self):
        config = Config(api_key="file-key")
        assert resolve_api_keys(config, {}) == {"claude": "file-key", "openai": "file-key"}

    def test_no_credentials(self):
        assert resolve_api_keys(Config(), {}) == {}


class TestConfigManager:

    def test_load_returns_defaults_when_no_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        manager = ConfigManager()
        config = manager.load()
        assert config.provider == "auto"
        assert manager.get_config_path() is None

    def test_load_reads_local_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config_file = tmp_path / ".cmsgrc"
        config_file.write_text(json.dumps({"provider": "ollama", "model": "llama3.2:3b"}))

        manager = ConfigManager()
        config = manager.load()
        assert config.provider == "ollama"
        assert config.model == "llama3.2:3b"
        assert manager.get_config_path().name == ".cmsgrc"

    def test_save_and_load_roundtrip(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path)

        ConfigManager().save(Config(provider="claude", timeout=90), global_config=True)

        loaded = ConfigManager().load()
        assert loaded.provider == "claude"
        assert loaded.timeout == 90

    def test_malformed_json_returns_defaults(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".cmsgrc").write_text("not valid json {{{")

        config = ConfigManager().load()
        assert config.provider == "auto"
        assert "Could not load" in capsys.readouterr().err
