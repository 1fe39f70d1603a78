"""Unit tests for catalog models.

Tests TargetEntry construction-time validation and the derived glob
properties.
"""

import pytest
from officecleanup.catalog.models import CatalogSection, SectionKey, TargetEntry, TargetKind


class TestTargetKind:
    """Tests for TargetKind helpers."""

    def test_path_kinds(self) -> None:
        """Only exact paths and globs address the filesystem."""
        assert TargetKind.EXACT_PATH.is_path
        assert TargetKind.GLOB_PATTERN.is_path
        assert not TargetKind.PROCESS_NAME_PATTERN.is_path
        assert not TargetKind.CREDENTIAL_SERVICE.is_path

    def test_credential_kinds(self) -> None:
        """Three kinds address the keychain."""
        credential = [kind for kind in TargetKind if kind.is_credential]
        assert credential == [
            TargetKind.CREDENTIAL_SERVICE,
            TargetKind.CREDENTIAL_ACCOUNT,
            TargetKind.CREDENTIAL_LABEL_PREFIX,
        ]


class TestTargetEntryValidation:
    """Tests for TargetEntry.__post_init__."""

    def test_valid_exact_path(self) -> None:
        """Home-relative exact paths are accepted."""
        entry = TargetEntry(TargetKind.EXACT_PATH, "~/Library/Fonts/Microsoft", "Fonts")
        assert entry.key == (TargetKind.EXACT_PATH, "~/Library/Fonts/Microsoft")

    def test_empty_locator_rejected(self) -> None:
        """An empty locator raises ValueError."""
        with pytest.raises(ValueError, match="Locator cannot be empty"):
            TargetEntry(TargetKind.CREDENTIAL_SERVICE, "", "label")

    def test_empty_label_rejected(self) -> None:
        """An empty label raises ValueError."""
        with pytest.raises(ValueError, match="Label cannot be empty"):
            TargetEntry(TargetKind.CREDENTIAL_SERVICE, "OneAuthAccount", "")

    def test_relative_path_rejected(self) -> None:
        """Path kinds must be absolute or home-relative."""
        with pytest.raises(ValueError, match="must start with"):
            TargetEntry(TargetKind.EXACT_PATH, "Library/Caches", "Caches")

    def test_exact_path_with_wildcard_rejected(self) -> None:
        """Exact paths cannot contain glob characters."""
        with pytest.raises(ValueError, match="must not contain glob characters"):
            TargetEntry(TargetKind.EXACT_PATH, "~/Library/Caches/com.microsoft.*", "Caches")

    def test_glob_wildcard_in_parent_rejected(self) -> None:
        """Wildcards are only allowed in the final component."""
        with pytest.raises(ValueError, match="only allowed in the last component"):
            TargetEntry(TargetKind.GLOB_PATTERN, "~/Library/*/com.microsoft.*", "Anything")

    def test_glob_without_wildcard_rejected(self) -> None:
        """A glob pattern needs at least one wildcard."""
        with pytest.raises(ValueError, match="needs a wildcard"):
            TargetEntry(TargetKind.GLOB_PATTERN, "~/Library/Caches/Microsoft", "Caches")

    def test_unload_service_on_credential_rejected(self) -> None:
        """Only path entries can be unloaded."""
        with pytest.raises(ValueError, match="Only path entries"):
            TargetEntry(TargetKind.CREDENTIAL_SERVICE, "OneAuthAccount", "OneAuth", unload_service=True)

    def test_recurring_on_label_prefix_rejected(self) -> None:
        """Only service and account selectors can recur."""
        with pytest.raises(ValueError, match="can recur"):
            TargetEntry(TargetKind.CREDENTIAL_LABEL_PREFIX, "Microsoft", "Prefix", recurring=True)

    def test_recurring_service_accepted(self) -> None:
        """A recurring service selector is valid."""
        entry = TargetEntry(TargetKind.CREDENTIAL_SERVICE, "OneAuthAccount", "OneAuth", recurring=True)
        assert entry.recurring is True

    def test_entry_is_immutable(self) -> None:
        """Entries are frozen."""
        entry = TargetEntry(TargetKind.PROCESS_NAME_PATTERN, "OneDrive", "OneDrive")
        with pytest.raises(AttributeError):
            entry.locator = "Teams"  # type: ignore[misc]


class TestGlobProperties:
    """Tests for glob_base and glob_name."""

    def test_split(self) -> None:
        """The pattern splits at the last slash."""
        entry = TargetEntry(TargetKind.GLOB_PATTERN, "~/Library/Containers/Microsoft *", "Containers")
        assert entry.glob_base == "~/Library/Containers"
        assert entry.glob_name == "Microsoft *"

    def test_non_glob_has_no_base(self) -> None:
        """Asking a non-glob entry for its base is an error."""
        entry = TargetEntry(TargetKind.EXACT_PATH, "/Library/Fonts/Microsoft", "Fonts")
        with pytest.raises(ValueError, match="no glob base"):
            _ = entry.glob_base


class TestCatalogSection:
    """Tests for CatalogSection defaults."""

    def test_sections_are_counted_by_default(self) -> None:
        """Sections contribute to the found count unless told otherwise."""
        section = CatalogSection(SectionKey.FONTS, "Fonts", ())
        assert section.counted is True
