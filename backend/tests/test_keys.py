"""
Tests for the storage key naming scheme.
"""
import threading

from app.storage.keys import (
    KeyClock,
    build_archive_key,
    build_download_url,
    derive_key,
    recover_file_name,
    unique_file_name,
)


class TestDeriveKey:
    """Tests for derive_key."""

    def test_derive_key_without_folder(self):
        """Test key is {timestamp}-{name} without a folder."""
        assert derive_key("report.pdf", timestamp=1718000000000) == "1718000000000-report.pdf"

    def test_derive_key_with_folder(self):
        """Test folder path is prepended."""
        key = derive_key("report.pdf", "2024", timestamp=42)
        assert key == "2024/42-report.pdf"

    def test_derive_key_folder_trailing_slash(self):
        """Test trailing slash on folder is not doubled."""
        assert derive_key("a.txt", "docs/", timestamp=1) == "docs/1-a.txt"

    def test_derive_key_empty_folder(self):
        """Test empty folder path is ignored."""
        assert derive_key("a.txt", "", timestamp=1) == "1-a.txt"

    def test_derive_key_uses_unique_timestamps(self):
        """Test consecutive keys for the same file never collide."""
        keys = {derive_key("same.txt") for _ in range(500)}
        assert len(keys) == 500


class TestRecoverFileName:
    """Tests for recover_file_name."""

    def test_round_trip_with_folder(self):
        """Test original name survives a folder path."""
        assert recover_file_name(derive_key("report.pdf", "2024")) == "report.pdf"

    def test_round_trip_preserves_hyphens(self):
        """Test hyphens in the original name are kept."""
        assert recover_file_name(derive_key("a-b-c.txt")) == "a-b-c.txt"

    def test_nested_folders(self):
        """Test only the last segment is considered."""
        assert recover_file_name("a-1/b-2/123-final-v2.docx") == "final-v2.docx"

    def test_segment_without_separator(self):
        """Test a segment with no '-' is returned whole."""
        assert recover_file_name("folder/plainname") == "plainname"

    def test_archive_key(self):
        """Test archive keys recover to {bundle}-{timestamp}.zip minus the bundle name."""
        assert recover_file_name("downloads/files-1718000000000.zip") == "1718000000000.zip"

    def test_unique_file_name(self):
        """Test unique_file_name returns the timestamped segment."""
        assert unique_file_name("2024/42-report.pdf") == "42-report.pdf"


class TestKeyClock:
    """Tests for KeyClock."""

    def test_follows_wall_clock(self):
        """Test advancing clock values are passed through."""
        values = iter([100, 200, 300])
        clock = KeyClock(now_ms=lambda: next(values))
        assert [clock.next(), clock.next(), clock.next()] == [100, 200, 300]

    def test_same_millisecond_is_disambiguated(self):
        """Test a stalled clock still yields increasing values."""
        clock = KeyClock(now_ms=lambda: 1000)
        assert [clock.next(), clock.next(), clock.next()] == [1000, 1001, 1002]

    def test_clock_going_backwards(self):
        """Test a clock stepping back never repeats a value."""
        values = iter([500, 400, 600])
        clock = KeyClock(now_ms=lambda: next(values))
        assert [clock.next(), clock.next(), clock.next()] == [500, 501, 600]

    def test_thread_safety(self):
        """Test concurrent callers never receive the same value."""
        clock = KeyClock(now_ms=lambda: 7)
        results = []
        lock = threading.Lock()

        def worker():
            for _ in range(200):
                value = clock.next()
                with lock:
                    results.append(value)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == len(set(results)) == 1600


class TestArchiveKeyAndUrl:
    """Tests for archive keys and download URLs."""

    def test_archive_key_default_name(self):
        """Test default bundle name is 'files'."""
        assert build_archive_key(timestamp=99) == "downloads/files-99.zip"

    def test_archive_key_custom_name(self):
        """Test the bundle name is used when given."""
        assert build_archive_key("holiday", timestamp=99) == "downloads/holiday-99.zip"

    def test_download_url_encodes_whole_key(self):
        """Test slashes and spaces are percent-encoded."""
        url = build_download_url("2024/42-my report.pdf", "http://example.com/")
        assert url == "http://example.com/api/download/2024%2F42-my%20report.pdf"

    def test_download_url_uses_configured_base(self):
        """Test the configured public base URL is the default."""
        assert build_download_url("1-a.txt") == "http://test/api/download/1-a.txt"
