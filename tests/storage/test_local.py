import pytest

from couture.storage.local import LocalStorage


class TestLocalStorage:
    def test_save_creates_file(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        path = storage.save("bills/BILL123456.pdf", b"pdf-content")

        assert (tmp_path / "bills" / "BILL123456.pdf").read_bytes() == b"pdf-content"
        assert path == str((tmp_path / "bills" / "BILL123456.pdf").resolve())

    def test_get_url_returns_path(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        url = storage.get_url("bills/BILL123456.pdf")
        assert url == str((tmp_path / "bills" / "BILL123456.pdf").resolve())

    def test_get_url_accepts_saved_path(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        path = storage.save("bills/BILL123456.pdf", b"data")
        assert storage.get_url(path) == path

    def test_creates_base_dir(self, tmp_path):
        new_dir = tmp_path / "new_dir"
        LocalStorage(str(new_dir))
        assert new_dir.exists()

    def test_key_cannot_escape_base_dir(self, tmp_path):
        storage = LocalStorage(str(tmp_path / "invoices"))
        with pytest.raises(ValueError, match="escapes base directory"):
            storage.save("../outside.pdf", b"data")
