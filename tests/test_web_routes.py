# Tests for the htmx page and its fragments.

from file_browser.services.path_resolver import encode_token
from tests.conftest import write_file


class TestPage:
    def test_index_renders(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert 'hx-get="/dirs"' in resp.text
        assert "/static/style.css" in resp.text

    def test_search_shows_current_directory(self, client, root):
        resp = client.get("/search")
        assert f'value="{root}"' in resp.text

    def test_static_assets(self, client):
        assert client.get("/static/style.css").status_code == 200


class TestListingFragment:
    def test_browse_mode_listing(self, client):
        resp = client.get("/dirs")
        assert resp.status_code == 200
        text = resp.text
        assert 'hx-post="/select_location"' in text
        assert 'hx-post="/movefile"' not in text
        assert "Pictures" in text and "Documents" in text
        assert "small.jpg" in text and "big.mp4" in text
        assert "notes.txt" not in text
        assert ".cache" not in text
        assert text.index("small.jpg") < text.index("big.mp4")

    def test_move_mode_listing(self, client):
        resp = client.post("/togglemove")
        assert resp.headers["HX-Trigger-After-Settle"] == "refetch"
        text = client.get("/dirs").text
        assert 'hx-post="/movefile"' in text
        assert "↪️" in text


class TestForms:
    def test_select_location(self, client, root):
        resp = client.post("/select_location", data={"destination": "Pictures"})
        assert resp.status_code == 200
        assert resp.headers["HX-Trigger-After-Settle"] == "refetch"
        assert f'value="{root / "Pictures"}"' in client.get("/search").text

    def test_show_image(self, client, root):
        token = encode_token(root / "Pictures" / "a.png")
        resp = client.post("/show", data={"destination": token})
        assert resp.status_code == 200
        assert resp.headers["HX-Trigger-After-Settle"] == "fetchrename"
        assert '<img class="preview-image" src="/files/Pictures/a.png"' in resp.text

    def test_show_video(self, client, root):
        resp = client.post("/show", data={"destination": encode_token(root / "big.mp4")})
        assert "<video" in resp.text
        assert 'width="400"' in resp.text

    def test_rename_input_shows_showcase(self, client, root):
        assert 'value=""' in client.get("/get_rename_input").text
        client.post("/show", data={"destination": encode_token(root / "small.jpg")})
        assert f'value="{root / "small.jpg"}"' in client.get("/get_rename_input").text

    def test_create_folder(self, client, root):
        resp = client.post("/create_folder", data={"folder_name": "New Folder"})
        assert resp.status_code == 200
        assert resp.headers["HX-Trigger-After-Settle"] == "refetch"
        assert (root / "New Folder").is_dir()

    def test_rename_file(self, client, root):
        client.post("/show", data={"destination": encode_token(root / "small.jpg")})
        resp = client.post("/rename_file", data={"new_name": "tiny.jpg"})
        assert resp.status_code == 200
        assert (root / "tiny.jpg").exists()

    def test_movefile(self, client, root):
        client.post("/show", data={"destination": encode_token(root / "big.mp4")})
        client.post("/togglemove")
        resp = client.post("/movefile", data={"destination": "Documents"})
        assert resp.status_code == 200
        assert (root / "Documents" / "big.mp4").exists()

    def test_movefile_without_showcase_renders_error(self, client):
        resp = client.post("/movefile", data={"destination": "Documents"})
        assert resp.status_code == 404
        assert "Error:" in resp.text

    def test_fragments_render(self, client):
        assert 'name="folder_name"' in client.get("/get_create_input").text
        assert 'hx-get="/get_rename_input"' in client.get("/output_dir").text


class TestTypedInput:
    def test_search_submits_typed_path(self, client, root):
        resp = client.post("/search", data={"location": str(root / "Documents")})
        assert resp.status_code == 200
        assert resp.headers["HX-Trigger-After-Settle"] == "refetch"
        assert f'value="{root / "Documents"}"' in client.get("/search").text

    def test_search_value_round_trips_percent_folder(self, client, root):
        (root / "100%").mkdir()
        client.post("/select_location", data={"destination": encode_token("100%")})
        shown = str(root / "100%")
        assert f'value="{shown}"' in client.get("/search").text

        resp = client.post("/search", data={"location": shown})
        assert resp.status_code == 200
        assert f'value="{shown}"' in client.get("/search").text

    def test_rename_prefill_round_trips_percent_name(self, client, root):
        source = write_file(root / "a%41.png", 5)
        client.post("/show", data={"destination": encode_token(source)})
        assert f'value="{source}"' in client.get("/get_rename_input").text

        resp = client.post("/rename_file", data={"new_name": str(source)})
        assert resp.status_code == 200
        assert source.exists()
        assert not (root / "aA.png").exists()

    def test_rename_typed_name_is_literal(self, client, root):
        client.post("/show", data={"destination": encode_token(root / "small.jpg")})
        client.post("/rename_file", data={"new_name": "50%25 #1.jpg"})
        assert (root / "50%25 #1.jpg").exists()

    def test_rename_empty_name_renders_error(self, client, root):
        client.post("/show", data={"destination": encode_token(root / "small.jpg")})
        resp = client.post("/rename_file", data={"new_name": ""})
        assert resp.status_code == 404
        assert "Error:" in resp.text
