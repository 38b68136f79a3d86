"""Integration tests for codedeck.api.main - FastAPI REST API endpoints.

All tests use the FastAPI TestClient against an app built from a temporary
configuration, with real templates written to disk and Pillow's default
font.  Tests cover every endpoint:

- ``GET /`` - welcome text.
- ``PUT /upload`` - deck generation and its error responses.
- ``GET /deck/{filename}`` - serving generated sheets.
- ``GET /source`` - source archive.
"""

from __future__ import annotations

import io
import tarfile

from fastapi.testclient import TestClient
from PIL import Image

from codedeck.api.main import create_app


def _body(count: int) -> bytes:
    return "\n".join(f"word{i}" for i in range(count)).encode("utf-8")


def _deck_files(test_config) -> list:
    return sorted(test_config.decks_dir.iterdir())


# ---------------------------------------------------------------------------
# Index page tests.
# ---------------------------------------------------------------------------


class TestIndexPage:
    """Test GET / - welcome text."""

    def test_index_returns_text(self, test_client):
        resp = test_client.get("/")
        assert resp.status_code == 200
        assert "text/plain" in resp.headers["content-type"]
        assert "/source" in resp.text


# ---------------------------------------------------------------------------
# Upload endpoint tests.
# ---------------------------------------------------------------------------


class TestUpload:
    """Test PUT /upload - deck generation."""

    def test_twenty_five_words(self, test_client, test_config, front_template):
        """25 words produce a 5x5 deck with two retrievable sheets."""
        resp = test_client.put("/upload", content=_body(25))
        assert resp.status_code == 200
        data = resp.json()
        assert data["num_cards"] == 25
        assert data["num_cards_wide"] == 5
        assert data["num_cards_tall"] == 5
        assert data["front"].startswith("http://testserver/deck/")
        assert data["front"].endswith("_f.png")
        assert data["back"].endswith("_b.png")
        assert data["front"][: -len("_f.png")] == data["back"][: -len("_b.png")]

        for url in (data["front"], data["back"]):
            sheet = test_client.get(url.replace("http://testserver", ""))
            assert sheet.status_code == 200
            assert sheet.headers["content-type"] == "image/png"
            with Image.open(io.BytesIO(sheet.content)) as image:
                assert image.size == (front_template.width * 5, front_template.height * 5)

        assert len(_deck_files(test_config)) == 2

    def test_twenty_six_words(self, test_client):
        """26 words need a sixth row."""
        resp = test_client.put("/upload", content=_body(26))
        assert resp.status_code == 200
        data = resp.json()
        assert (data["num_cards"], data["num_cards_wide"], data["num_cards_tall"]) == (26, 5, 6)

    def test_trailing_blank_lines_ignored(self, test_client):
        resp = test_client.put("/upload", content=_body(25) + b"\n\n\n")
        assert resp.status_code == 200
        assert resp.json()["num_cards"] == 25

    def test_each_upload_is_a_new_deck(self, test_client, test_config):
        first = test_client.put("/upload", content=_body(25)).json()
        second = test_client.put("/upload", content=_body(25)).json()
        assert first["front"] != second["front"]
        assert len(_deck_files(test_config)) == 4

    def test_too_few_words(self, test_client, test_config):
        """24 words are rejected without writing anything."""
        resp = test_client.put("/upload", content=_body(24))
        assert resp.status_code == 400
        assert resp.json()["error"] == "TooFewWords"
        assert _deck_files(test_config) == []

    def test_empty_body(self, test_client, test_config):
        resp = test_client.put("/upload", content=b"")
        assert resp.status_code == 400
        assert resp.json()["error"] == "TooFewWords"
        assert _deck_files(test_config) == []

    def test_invalid_utf8(self, test_client, test_config):
        """Non-UTF-8 bodies are rejected before any image work."""
        resp = test_client.put("/upload", content=b"\xff\xfe" + _body(30))
        assert resp.status_code == 400
        assert resp.json()["error"] == "InvalidEncoding"
        assert _deck_files(test_config) == []

    def test_too_many_words(self, test_client, test_config):
        resp = test_client.put("/upload", content=_body(401))
        assert resp.status_code == 400
        assert resp.json()["error"] == "TooManyWords"
        assert _deck_files(test_config) == []

    def test_get_not_allowed(self, test_client):
        resp = test_client.get("/upload")
        assert resp.status_code == 405

    def test_write_failure_is_server_error(self, test_client, test_config, monkeypatch):
        """A failed save returns 500 and leaves no deck behind."""
        original_save = Image.Image.save

        def failing_save(self, fp, *args, **kwargs):
            if str(fp).endswith("_b.png.tmp"):
                raise OSError("disk full")
            return original_save(self, fp, *args, **kwargs)

        monkeypatch.setattr(Image.Image, "save", failing_save)

        resp = test_client.put("/upload", content=_body(25))
        assert resp.status_code == 500
        assert resp.json()["error"] == "EncodeOrWriteFailure"
        assert _deck_files(test_config) == []

    def test_huge_word_at_default_font_size(self, test_config):
        """A single 200k character word does not break rendering."""
        cfg = test_config.model_copy(update={"font_size": 64})
        body = _body(24) + b"\n" + b"W" * 200_000
        with TestClient(create_app(cfg)) as client:
            resp = client.put("/upload", content=body)
        assert resp.status_code == 200
        assert resp.json()["num_cards"] == 25
        assert len(_deck_files(test_config)) == 2


class TestUploadWithoutAssets:
    """Uploads when the templates could not be loaded at startup."""

    def test_missing_template_is_server_error(self, test_config, template_paths):
        template_paths[0].unlink()
        with TestClient(create_app(test_config)) as client:
            resp = client.put("/upload", content=_body(25))
            assert resp.status_code == 500
            assert resp.json()["error"] == "ResourceLoadFailure"

            # Client errors are still reported as such.
            resp = client.put("/upload", content=_body(3))
            assert resp.status_code == 400
        assert _deck_files(test_config) == []


# ---------------------------------------------------------------------------
# Static deck serving tests.
# ---------------------------------------------------------------------------


class TestDeckFiles:
    """Test GET /deck/{filename}."""

    def test_unknown_deck(self, test_client):
        resp = test_client.get("/deck/00000000-0000-4000-8000-000000000000_f.png")
        assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Source archive tests.
# ---------------------------------------------------------------------------


class TestSource:
    """Test GET /source."""

    def test_source_is_a_tar_of_the_package(self, test_client):
        resp = test_client.get("/source")
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "application/x-tar"

        with tarfile.open(fileobj=io.BytesIO(resp.content)) as archive:
            names = archive.getnames()
        assert "codedeck/api/main.py" in names
        assert not any("__pycache__" in name for name in names)
        # Only the package is archived by default, not the repository around it.
        assert all(name == "codedeck" or name.startswith("codedeck/") for name in names)
        assert "pyproject.toml" not in names

    def test_source_dir_can_point_at_a_checkout(self, test_config, temp_dir):
        checkout = temp_dir / "checkout"
        (checkout / "src").mkdir(parents=True)
        (checkout / "pyproject.toml").write_text("[project]\n")
        (checkout / "src" / "app.py").write_text("print()\n")
        cfg = test_config.model_copy(update={"source_dir": checkout})
        with TestClient(create_app(cfg)) as client:
            resp = client.get("/source")
        assert resp.status_code == 200
        with tarfile.open(fileobj=io.BytesIO(resp.content)) as archive:
            names = archive.getnames()
        assert "checkout/pyproject.toml" in names
        assert "checkout/src/app.py" in names

    def test_missing_source_dir(self, test_config, temp_dir):
        cfg = test_config.model_copy(update={"source_dir": temp_dir / "nowhere"})
        with TestClient(create_app(cfg)) as client:
            resp = client.get("/source")
        assert resp.status_code == 404
