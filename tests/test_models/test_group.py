"""Unit tests for depmatrix.models.group module."""

from __future__ import annotations

from depmatrix.models.group import UpdateGroup
from depmatrix.models.package import ResolvedPackage


def _group(**overrides) -> UpdateGroup:
    fields = dict(
        packages=[
            ResolvedPackage("@foo/a", "1.0.0", "1.1.0"),
            ResolvedPackage("@foo/b", "1.0.2", "1.1.0"),
        ],
        scope="foo",
        group_current_version="1.0.0",
        group_latest_version="1.1.0",
        semver_label="minor",
        display_name="foo packages",
        identifier="abc",
        changelog_body="- Bumps @foo/a from 1.0.0 to 1.1.0\n",
        slug="foo-1_1_0",
    )
    fields.update(overrides)
    return UpdateGroup(**fields)


class TestUpdateGroup:
    """Tests for UpdateGroup."""

    def test_defaults(self) -> None:
        """Test an empty group has neutral defaults."""
        group = UpdateGroup()

        assert group.packages == []
        assert group.scope is None
        assert group.semver_label == "none"

    def test_package_names(self) -> None:
        """Test member names are listed in group order."""
        assert _group().package_names == ["@foo/a", "@foo/b"]

    def test_to_json(self) -> None:
        """Test every matrix field is present with camelCase keys."""
        data = _group().to_json()

        assert data == {
            "packages": [
                {
                    "name": "@foo/a",
                    "currentVersion": "1.0.0",
                    "latestVersion": "1.1.0",
                    "repositoryUrl": None,
                },
                {
                    "name": "@foo/b",
                    "currentVersion": "1.0.2",
                    "latestVersion": "1.1.0",
                    "repositoryUrl": None,
                },
            ],
            "scope": "foo",
            "groupCurrentVersion": "1.0.0",
            "groupLatestVersion": "1.1.0",
            "semverLabel": "minor",
            "displayName": "foo packages",
            "identifier": "abc",
            "changelogBody": "- Bumps @foo/a from 1.0.0 to 1.1.0\n",
            "slug": "foo-1_1_0",
        }

    def test_none_label_serializes_as_null(self) -> None:
        """Test the 'none' label becomes null."""
        assert _group(semver_label="none").to_json()["semverLabel"] is None

    def test_str(self) -> None:
        """Test the summary line."""
        assert str(_group()) == "foo packages 1.0.0 -> 1.1.0 (minor)"
