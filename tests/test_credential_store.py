"""Tests for reading vendor credentials from auth.json."""
from __future__ import annotations

import pytest

from gateway_library.core.errors import AuthError
from gateway_library.credential_store import CredentialStore


def test_returns_vendor_entry(write_auth) -> None:
    path = write_auth({"github-copilot": {"access": "a", "refresh": "gho_token"}})
    entry = CredentialStore(path).get_vendor_credential("github-copilot", "refresh")
    assert entry["refresh"] == "gho_token"


def test_missing_file(tmp_path) -> None:
    store = CredentialStore(tmp_path / "auth.json")
    with pytest.raises(AuthError) as exc_info:
        store.get_vendor_credential("github-copilot", "refresh")
    assert "auth.json not found" in str(exc_info.value)


def test_invalid_json(tmp_path) -> None:
    path = tmp_path / "auth.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(AuthError):
        CredentialStore(path).get_vendor_credential("github-copilot", "refresh")


def test_non_object_document(write_auth) -> None:
    path = write_auth(["github-copilot"])
    with pytest.raises(AuthError):
        CredentialStore(path).get_vendor_credential("github-copilot", "refresh")


def test_missing_vendor(write_auth) -> None:
    path = write_auth({"google-antigravity": {"access": "ya29"}})
    with pytest.raises(AuthError) as exc_info:
        CredentialStore(path).get_vendor_credential("github-copilot", "refresh")
    assert str(exc_info.value) == "github-copilot credential not found in auth.json"
    assert exc_info.value.provider == "github-copilot"


@pytest.mark.parametrize("entry", [{"access": "a"}, {"refresh": ""}, {"refresh": "  "}, {"refresh": 5}])
def test_missing_token_field(write_auth, entry) -> None:
    path = write_auth({"github-copilot": entry})
    with pytest.raises(AuthError) as exc_info:
        CredentialStore(path).get_vendor_credential("github-copilot", "refresh")
    assert "missing 'refresh'" in str(exc_info.value)


def test_reads_file_on_every_lookup(write_auth) -> None:
    path = write_auth({})
    store = CredentialStore(path)
    with pytest.raises(AuthError):
        store.get_vendor_credential("google-antigravity", "access")

    write_auth({"google-antigravity": {"access": "ya29.fresh"}})
    assert store.get_vendor_credential("google-antigravity", "access")["access"] == "ya29.fresh"
