import subprocess

import pytest

from gpgprobe.errors import CollaboratorError
from gpgprobe.keyring import GpgKeyring, KeyExpiryRecord, has_revocation, parse_expiry_records
from _util import CHECK_SIGS_CLEAN, CHECK_SIGS_REVOKED, LIST_KEYS_NO_EXPIRY, LIST_KEYS_OK, LIST_KEYS_TWO


def test_parse_expiry_reads_primary_keys_only():
    assert parse_expiry_records(LIST_KEYS_OK) == [
        KeyExpiryRecord(expires_at=1900000000, key_id="ABCDEF0123456789")
    ]


def test_parse_expiry_keeps_listing_order():
    recs = parse_expiry_records(LIST_KEYS_TWO)
    assert [r.key_id for r in recs] == ["AAAAAAAAAAAAAAAA", "BBBBBBBBBBBBBBBB"]
    assert [r.expires_at for r in recs] == [1900000000, 1550000000]


def test_parse_expiry_empty_field_means_no_expiry():
    assert parse_expiry_records(LIST_KEYS_NO_EXPIRY) == [
        KeyExpiryRecord(expires_at=None, key_id="FEDCBA9876543210")
    ]


def test_parse_expiry_tolerates_short_lines_and_no_match():
    assert parse_expiry_records("pub:u:255:22\n") == [KeyExpiryRecord()]
    assert parse_expiry_records("") == []
    assert parse_expiry_records("tru::1:1759000000:0:3:1:5\n") == []


def test_parse_expiry_rejects_garbage():
    with pytest.raises(CollaboratorError, match="unparseable"):
        parse_expiry_records("pub:u:255:22:ABCD:1600000000:20300101T000000::u:::sc:\n")


def test_has_revocation():
    assert has_revocation(CHECK_SIGS_REVOKED) is True
    assert has_revocation(CHECK_SIGS_CLEAN) is False
    assert has_revocation("") is False


class _Proc:
    def __init__(self, returncode=0, stdout=b"", stderr=b""):
        self.returncode = returncode
        self.stdout = stdout.encode() if isinstance(stdout, str) else stdout
        self.stderr = stderr.encode() if isinstance(stderr, str) else stderr


def _fake_run(monkeypatch, outputs):
    calls = []

    def run(cmd, **kwargs):
        calls.append(cmd)
        for flag, proc in outputs.items():
            if flag in cmd:
                return proc
        return _Proc()

    monkeypatch.setattr(subprocess, "run", run)
    return calls


def test_gpg_keyring_builds_commands(monkeypatch, tmp_path):
    calls = _fake_run(monkeypatch, {"--fixed-list-mode": _Proc(stdout=LIST_KEYS_OK)})
    kr = GpgKeyring(homedir=tmp_path, binary="gpg2")
    kr.exists("0xABCD")
    kr.refresh("0xABCD")
    assert kr.list_expiry("0xABCD")[0].expires_at == 1900000000
    assert calls[0] == [
        "gpg2", "--batch", "--no-tty", "--with-colons", "--homedir", str(tmp_path), "--list-keys", "--", "0xABCD"
    ]
    assert "--refresh-keys" in calls[1]
    assert calls[2][-4:] == ["--fixed-list-mode", "--list-keys", "--", "0xABCD"]


def test_gpg_keyring_without_homedir(monkeypatch):
    calls = _fake_run(monkeypatch, {"--check-sigs": _Proc(stdout=CHECK_SIGS_REVOKED)})
    assert GpgKeyring().is_revoked("0xABCD") is True
    assert "--homedir" not in calls[0]
    assert calls[0][0] == "gpg"


def test_gpg_keyring_nonzero_exit_carries_stderr(monkeypatch):
    _fake_run(monkeypatch, {"--list-keys": _Proc(returncode=2, stderr="gpg: error reading key: No public key\n")})
    with pytest.raises(CollaboratorError, match="No public key"):
        GpgKeyring().exists("0xABCD")


def test_gpg_keyring_nonzero_exit_without_stderr(monkeypatch):
    _fake_run(monkeypatch, {"--refresh-keys": _Proc(returncode=2)})
    with pytest.raises(CollaboratorError, match="exit status 2"):
        GpgKeyring().refresh("0xABCD")


def test_gpg_keyring_missing_binary(monkeypatch):
    def run(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(subprocess, "run", run)
    with pytest.raises(CollaboratorError, match="could not run"):
        GpgKeyring(binary="/nonexistent/gpg").exists("0xABCD")


def test_gpg_keyring_survives_latin1_user_id(monkeypatch):
    listing = (
        b"pub:u:255:22:ABCDEF0123456789:1600000000:1900000000::u:::sc::::::23::0:\n"
        b"uid:u::::1600000000::0A1B2C::M\xfcller <m@example.com>::::::::::0:\n"
    )
    _fake_run(monkeypatch, {"--fixed-list-mode": _Proc(stdout=listing)})
    assert GpgKeyring().list_expiry("0xABCD") == [
        KeyExpiryRecord(expires_at=1900000000, key_id="ABCDEF0123456789")
    ]


def test_gpg_keyring_latin1_in_signature_report(monkeypatch):
    sigs = CHECK_SIGS_REVOKED.encode() + b"sig:!::22:1111:1600000000::::J\xf6rg <j@example.com>:13x:\n"
    _fake_run(monkeypatch, {"--check-sigs": _Proc(stdout=sigs)})
    assert GpgKeyring().is_revoked("0xABCD") is True


def test_gpg_keyring_flattens_multiline_stderr(monkeypatch):
    stderr = b"gpg: keyserver refresh failed: No keyserver available\ngpg: r\xe9seau injoignable\n"
    _fake_run(monkeypatch, {"--refresh-keys": _Proc(returncode=2, stderr=stderr)})
    with pytest.raises(CollaboratorError) as excinfo:
        GpgKeyring().refresh("0xABCD")
    message = str(excinfo.value)
    assert "\n" not in message
    assert message.endswith("No keyserver available; gpg: r\ufffdseau injoignable")
