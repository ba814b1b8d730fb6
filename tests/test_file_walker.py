"""Directory walker tests: ignore rules, caps and determinism."""

import pytest

from codebase_context.errors import ProjectPathError
from codebase_context.utils.file_filter import FileFilter
from codebase_context.utils.file_walker import FileWalker, directory_structure

from conftest import write_files


def walked_paths(walker, root):
    return [entry.relative_path for entry in walker.walk(str(root))]


@pytest.mark.unit
class TestFileWalker:
    """FileWalker.walk behaviour."""

    def test_yields_supported_files_in_sorted_order(self, project_dir):
        write_files(project_dir, {
            "b.py": "x = 1\n",
            "a.ts": "let a = 1;\n",
            "src/z.js": "var z;\n",
            "src/inner/m.cs": "class M {}\n",
            "notes.txt": "not code\n",
            "README.md": "# readme\n",
        })

        paths = walked_paths(FileWalker(), project_dir)

        assert paths == ["a.ts", "b.py", "src/z.js", "src/inner/m.cs"]

    def test_entries_carry_absolute_path_and_size(self, project_dir):
        write_files(project_dir, {"pkg/mod.py": "value = 42\n"})
        entry = next(iter(FileWalker().walk(str(project_dir))))

        assert entry.relative_path == "pkg/mod.py"
        assert entry.absolute_path.endswith("mod.py")
        assert entry.size_bytes == len("value = 42\n")

    def test_default_excludes_and_hidden_entries(self, project_dir):
        write_files(project_dir, {
            "node_modules/lib/index.js": "x\n",
            "dist/bundle.js": "x\n",
            "app.min.js": "x\n",
            ".hidden/secret.py": "x\n",
            ".eslintrc.json": "{}\n",
            "obj/Debug/Gen.cs": "x\n",
            "keep.js": "x\n",
        })

        assert walked_paths(FileWalker(), project_dir) == ["keep.js"]

    def test_gitignore_patterns_apply(self, project_dir):
        write_files(project_dir, {
            ".gitignore": "generated/\n*.gen.ts\n!important.gen.ts\n",
            "generated/api.ts": "x\n",
            "models.gen.ts": "x\n",
            "important.gen.ts": "x\n",
            "main.ts": "x\n",
        })

        assert walked_paths(FileWalker(), project_dir) == ["important.gen.ts", "main.ts"]

    def test_size_cap(self, project_dir):
        write_files(project_dir, {"small.py": "x = 1\n", "big.py": "x = 1\n" * 400})

        walker = FileWalker(max_file_size_bytes=100)
        assert walked_paths(walker, project_dir) == ["small.py"]

    def test_count_cap_is_exact_and_stable(self, project_dir):
        write_files(project_dir, {f"mod_{i:02d}.py": "x = 1\n" for i in range(25)})

        walker = FileWalker(max_files=10)
        first = walked_paths(walker, project_dir)
        second = walked_paths(walker, project_dir)

        assert len(first) == 10
        assert first == second
        assert first == [f"mod_{i:02d}.py" for i in range(10)]

    def test_missing_root_raises(self, project_dir):
        with pytest.raises(ProjectPathError):
            list(FileWalker().walk(str(project_dir / "missing")))

    def test_file_root_raises(self, project_dir):
        write_files(project_dir, {"single.py": "x\n"})
        with pytest.raises(ProjectPathError):
            list(FileWalker().walk(str(project_dir / "single.py")))


@pytest.mark.unit
class TestFileFilter:
    """Ignore rule evaluation."""

    def test_directory_patterns_need_trailing_slash_semantics(self):
        file_filter = FileFilter(["build/"])
        assert file_filter.should_exclude_directory("build")
        assert not file_filter.should_exclude_file("build")

    def test_hidden_names(self):
        file_filter = FileFilter([])
        assert file_filter.should_exclude_directory("src/.cache")
        assert file_filter.should_exclude_file(".env")
        assert not file_filter.should_exclude_file("src/app.py")


@pytest.mark.unit
def test_directory_structure_two_levels(project_dir):
    write_files(project_dir, {
        "src/app/main.py": "x\n",
        "src/util.py": "x\n",
        "top.py": "x\n",
        "node_modules/pkg/index.js": "x\n",
    })

    structure = directory_structure(str(project_dir))

    assert structure == ["src/", "src/app/", "src/util.py", "top.py"]
