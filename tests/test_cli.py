"""Tests for the yarn-lockfile command line entrypoint."""

import json

from yarn_lockfile.cli import EXIT_CONFLICT, EXIT_ERROR, EXIT_OK, main


class TestMain:
    """Tests for cli.main."""

    def test_prints_mapping(self, lockfiles_dir, capsys):
        assert main([str(lockfiles_dir / "valid.lock")]) == EXIT_OK
        payload = json.loads(capsys.readouterr().out)
        assert payload["status"] == "success"
        assert payload["mapping"]["dep_name@^42"]["version"] == "42"

    def test_prints_typed_lockfile(self, lockfiles_dir, capsys):
        assert main([str(lockfiles_dir / "registry.lock"), "--lockfile"]) == EXIT_OK
        payload = json.loads(capsys.readouterr().out)
        assert payload["version"] == 1
        assert payload["dependencies"][2]["name"] == "js-tokens@^4.0.0"

    def test_merge_status(self, lockfiles_dir, capsys):
        assert main([str(lockfiles_dir / "conflict.lock")]) == EXIT_OK
        assert json.loads(capsys.readouterr().out)["status"] == "merge"

    def test_parse_error(self, lockfiles_dir, capsys):
        assert main([str(lockfiles_dir / "invalid_version.lock")]) == EXIT_ERROR
        assert "Lockfile version 2 is not supported" in capsys.readouterr().err

    def test_conflict_error(self, tmp_path, capsys):
        path = tmp_path / "yarn.lock"
        path.write_text("<<<<<<< HEAD\na:\n   b 1\n=======\na 2\n>>>>>>> x\n")
        assert main([str(path), "--no-yaml-fallback"]) == EXIT_CONFLICT
        assert "variant 1" in capsys.readouterr().err

    def test_missing_source(self, tmp_path, capsys):
        assert main([str(tmp_path / "yarn.lock")]) == EXIT_ERROR
        assert capsys.readouterr().err.startswith("ERROR:")

    def test_missing_config(self, lockfiles_dir, tmp_path):
        args = [str(lockfiles_dir / "valid.lock"), "--config", str(tmp_path / "none.json")]
        assert main(args) == EXIT_ERROR
