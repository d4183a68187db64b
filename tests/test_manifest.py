"""
Tests for the manifest version lookup.
"""

import json

from myparcel_sdk.manifest import build_user_agent, read_manifest_version


class TestReadManifestVersion:
    """Test cases for read_manifest_version."""

    def test_missing_files(self, tmp_path):
        assert read_manifest_version([tmp_path / "a.json", tmp_path / "b.json"]) is None

    def test_first_candidate_wins(self, tmp_path):
        first = tmp_path / "first.json"
        second = tmp_path / "second.json"
        first.write_text(json.dumps({"name": "myparcelnl/sdk", "version": "2.0.0"}))
        second.write_text(json.dumps({"name": "myparcelnl/sdk", "version": "1.0.0"}))

        assert read_manifest_version([first, second]) == "2.0.0"

    def test_falls_through_to_second(self, tmp_path):
        second = tmp_path / "second.json"
        second.write_text(json.dumps({"name": "myparcelnl/sdk", "version": "v1.0.0"}))

        assert read_manifest_version([tmp_path / "missing.json", second]) == "1.0.0"

    def test_only_leading_v_stripped(self, tmp_path):
        manifest = tmp_path / "composer.json"
        manifest.write_text(json.dumps({"name": "myparcelnl/sdk", "version": "v1.0.0-dev"}))

        assert read_manifest_version([manifest]) == "1.0.0-dev"

    def test_malformed_json(self, tmp_path):
        manifest = tmp_path / "composer.json"
        manifest.write_text("{not json")

        assert read_manifest_version([manifest]) is None

    def test_not_an_object(self, tmp_path):
        manifest = tmp_path / "composer.json"
        manifest.write_text(json.dumps(["1.0.0"]))

        assert read_manifest_version([manifest]) is None

    def test_no_version(self, tmp_path):
        manifest = tmp_path / "composer.json"
        manifest.write_text(json.dumps({"name": "myparcelnl/sdk"}))

        assert read_manifest_version([manifest]) is None

    def test_directory_is_skipped(self, tmp_path):
        assert read_manifest_version([tmp_path]) is None


def test_build_user_agent():
    assert build_user_agent("1.2.3") == "MyParcelNL-SDK/1.2.3"
    assert build_user_agent(None) == "MyParcelNL-SDK/unknown"
