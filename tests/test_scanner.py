"""Tests for scan orchestration."""

from conftest import write_bytes

from flutter_cleaner import scanner
from flutter_cleaner.models import CacheTarget, TargetKind
from flutter_cleaner.observer import ScanObserver
from flutter_cleaner.scanner import scan, scan_global_targets


class TestScan:
    def test_scenario_default_targets(self, tmp_path, make_project):
        make_project(tmp_path / "app", build_files=10, build_bytes=4096, dart_tool_bytes=2048)

        result = scan([str(tmp_path)])

        assert result.project_count == 1
        project = result.priority_projects[0]
        assert project.is_priority
        assert len(project.targets) == 2
        assert result.total_size == 6144

    def test_manifest_only_directory_not_reported(self, tmp_path, make_project):
        make_project(tmp_path / "pkg", marker=None, build_files=3, build_bytes=300)

        result = scan([str(tmp_path)])
        assert result.project_count == 0
        assert result.total_size == 0

    def test_depth_limit(self, tmp_path, make_project):
        make_project(tmp_path / "one" / "two", build_files=1, build_bytes=1)

        assert scan([str(tmp_path)], max_depth=1).project_count == 0
        assert scan([str(tmp_path)], max_depth=0).project_count == 1

    def test_projects_without_targets_omitted(self, tmp_path, make_project):
        make_project(tmp_path / "clean")
        make_project(tmp_path / "dirty", build_files=1, build_bytes=5)

        result = scan([str(tmp_path)])
        assert [p.path for p in result.priority_projects] == [
            str((tmp_path / "dirty").resolve())
        ]

    def test_missing_roots_ignored(self, tmp_path):
        result = scan([str(tmp_path / "missing")])
        assert result.project_count == 0
        assert result.global_targets == []

    def test_idempotent_without_clean(self, tmp_path, make_project):
        make_project(tmp_path / "a", build_files=2, build_bytes=100)
        make_project(tmp_path / "b", marker="ios", dart_tool_bytes=50)

        first = scan([str(tmp_path)])
        second = scan([str(tmp_path)])

        assert first.model_dump() == second.model_dump()

    def test_optional_targets_and_kinds(self, tmp_path, make_project):
        project = make_project(tmp_path / "app", build_files=1, build_bytes=10)
        write_bytes(project / ".idea" / "workspace.xml", 7)

        assert scan([str(tmp_path)]).total_size == 10
        assert scan([str(tmp_path)], include_optional=True).total_size == 17

        only_idea = scan([str(tmp_path)], include_optional=True, kinds=[TargetKind.IDEA])
        assert [t.kind for t in only_idea.all_targets] == ["idea"]


class TestDefaultRoots:
    def test_priority_project_not_repeated(self, isolated_home, make_project):
        work = isolated_home / "Projects" / "work"
        make_project(work / "app", build_files=1, build_bytes=10)
        make_project(isolated_home / "Projects" / "other", build_files=1, build_bytes=20)

        result = scan([str(work)], include_defaults=True)

        priority = [p.path for p in result.priority_projects]
        default = [p.path for p in result.default_projects]
        assert priority == [str((work / "app").resolve())]
        assert default == [str((isolated_home / "Projects" / "other").resolve())]
        assert result.total_size == 30

    def test_defaults_off_by_default(self, isolated_home, make_project):
        make_project(isolated_home / "Documents" / "app", build_files=1, build_bytes=10)

        assert scan([]).project_count == 0
        result = scan([], include_defaults=True)
        assert result.project_count == 1
        assert not result.default_projects[0].is_priority

    def test_defaults_patched(self, tmp_path, make_project, monkeypatch):
        make_project(tmp_path / "defaults" / "app", build_files=1, build_bytes=3)
        monkeypatch.setattr(
            "flutter_cleaner.scanner.get_default_scan_roots",
            lambda: [str(tmp_path / "defaults")],
        )

        result = scan([], include_defaults=True)
        assert len(result.default_projects) == 1


class TestGlobalScan:
    def test_global_targets_included_on_request(self, isolated_home, tmp_path):
        write_bytes(isolated_home / ".pub-cache" / "hosted" / "a", 100)

        assert scan([str(tmp_path)]).global_targets == []

        result = scan([str(tmp_path)], include_global=True)
        assert [t.kind for t in result.global_targets] == ["pub_cache"]
        assert result.global_targets[0].size_bytes == 100

    def test_sizes_recomputed(self, isolated_home, monkeypatch):
        cache = isolated_home / ".gradle" / "caches"
        write_bytes(cache / "a", 10)

        stale = CacheTarget(kind="gradle_cache", path=str(cache.resolve()), size_bytes=1, is_global=True)
        monkeypatch.setattr(scanner, "find_global_targets", lambda: [stale])
        write_bytes(cache / "b", 40)

        targets = scan_global_targets()
        assert targets[0].size_bytes == 50


class TestObserver:
    def test_events_reported(self, tmp_path, make_project):
        make_project(tmp_path / "app", build_files=1, build_bytes=10, dart_tool_bytes=5)
        events = []

        class Recorder(ScanObserver):
            def on_message(self, message):
                events.append(("message", message))

            def on_project_found(self, path):
                events.append(("project", path))

            def on_target_sized(self, target):
                events.append(("target", target.kind))

        result = scan([str(tmp_path)], observer=Recorder())

        assert ("project", str((tmp_path / "app").resolve())) in events
        assert ("target", "build") in events
        assert ("target", "dart_tool") in events
        assert events[0] == ("message", "Starting scan...")
        assert result.total_size == 15

    def test_result_independent_of_observer(self, tmp_path, make_project):
        make_project(tmp_path / "app", build_files=3, build_bytes=99)

        assert scan([str(tmp_path)]).model_dump() == scan(
            [str(tmp_path)], observer=ScanObserver()
        ).model_dump()
