# Tests for token decoding and path resolution.

from pathlib import Path

import pytest

from file_browser.core.exceptions import InvalidEncodingError, PathOutsideRootError
from file_browser.services.path_resolver import PathResolver, encode_token


class TestDecode:
    def test_decodes_percent_escapes(self):
        assert PathResolver.decode("%2Fhome%2Fuser%2Fa%20b.png") == "/home/user/a b.png"

    def test_plain_text_unchanged(self):
        assert PathResolver.decode("Pictures") == "Pictures"

    def test_hash_survives_round_trip(self):
        name = "/srv/take #2.mov"
        assert PathResolver.decode(encode_token(name)) == name

    @pytest.mark.parametrize("token", ["100%", "%zz", "a%2", "%ff"])
    def test_malformed_tokens_rejected(self, token):
        with pytest.raises(InvalidEncodingError):
            PathResolver.decode(token)


class TestResolve:
    def test_joins_name_onto_base(self, tmp_path):
        assert PathResolver().resolve(tmp_path, "Pictures") == tmp_path / "Pictures"

    def test_parent_token(self, tmp_path):
        assert PathResolver().resolve(tmp_path / "a", "..") == tmp_path

    def test_parent_of_filesystem_root_is_root(self):
        root = Path(Path.cwd().anchor)
        assert PathResolver().resolve(root, "..") == root

    def test_encoded_parent_token(self, tmp_path):
        assert PathResolver().resolve(tmp_path / "a", "%2E%2E") == tmp_path

    def test_absolute_token_replaces_base(self, tmp_path):
        target = tmp_path / "elsewhere"
        assert PathResolver().resolve(tmp_path / "a", encode_token(target)) == target

    def test_traversal_not_sanitized_by_default(self, tmp_path):
        resolved = PathResolver(tmp_path).resolve(tmp_path, "..%2F..%2Fetc")
        assert resolved == tmp_path / "../../etc"

    def test_confined_resolver_rejects_escape(self, tmp_path):
        resolver = PathResolver(tmp_path, confine_to_root=True)
        with pytest.raises(PathOutsideRootError):
            resolver.resolve(tmp_path, "..%2F..%2Fetc")

    def test_confined_resolver_allows_children(self, tmp_path):
        resolver = PathResolver(tmp_path, confine_to_root=True)
        assert resolver.resolve(tmp_path, "sub") == tmp_path / "sub"

    def test_confined_resolver_rejects_parent_of_root(self, tmp_path):
        resolver = PathResolver(tmp_path, confine_to_root=True)
        with pytest.raises(PathOutsideRootError):
            resolver.resolve(tmp_path, "..")

    def test_confinement_requires_root(self):
        with pytest.raises(ValueError):
            PathResolver(confine_to_root=True)
