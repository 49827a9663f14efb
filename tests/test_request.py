"""
Tests for KV version 2 request construction
"""

import pytest

from vault_kv_client import (
    CreateOnly,
    CurrentVersion,
    SecretPath,
    SecretVersion,
    WriteAllowed,
    to_secret_data,
    to_secret_versions,
)
from vault_kv_client import request as rq

BASE = "https://vault.local.lan:8200/v1/secret"


class TestUrls:
    
    def test_read_current_version(self, connection):
        req = rq.read_secret_request(connection, SecretPath("MySecret"))
        
        assert req.method == "GET"
        assert req.url == f"{BASE}/data/MySecret"
        assert req.params == {}
        assert req.json is None
    
    def test_read_explicit_version(self, connection):
        req = rq.read_secret_request(connection, SecretPath("MySecret"), SecretVersion(3))
        
        assert req.params == {"version": "3"}
    
    def test_version_zero_reads_current(self, connection):
        req = rq.read_secret_request(connection, SecretPath("MySecret"), SecretVersion(0))
        
        assert req.params == {}
    
    def test_nested_path_and_leading_slash(self, connection):
        req = rq.read_metadata_request(connection, SecretPath("/apps/db/creds"))
        
        assert req.url == f"{BASE}/metadata/apps/db/creds"
    
    def test_list(self, connection):
        req = rq.list_secrets_request(connection, SecretPath("apps/"))
        
        assert req.method == "GET"
        assert req.url == f"{BASE}/metadata/apps/"
        assert req.params == {"list": "true"}
    
    def test_soft_delete(self, connection):
        req = rq.delete_secret_request(connection, SecretPath("MySecret"))
        
        assert (req.method, req.url, req.json) == ("DELETE", f"{BASE}/data/MySecret", None)
    
    def test_destroy_all(self, connection):
        req = rq.destroy_secret_request(connection, SecretPath("MySecret"))
        
        assert (req.method, req.url) == ("DELETE", f"{BASE}/metadata/MySecret")
    
    @pytest.mark.parametrize("segment", [rq.DELETE, rq.UNDELETE, rq.DESTROY])
    def test_versions_operations(self, connection, segment):
        req = rq.secret_versions_request(
            connection, segment, SecretPath("MySecret"), to_secret_versions([1, 2])
        )
        
        assert req.method == "POST"
        assert req.url == f"{BASE}/{segment}/MySecret"
        assert req.json == {"versions": [1, 2]}


class TestHeaders:
    
    def test_token_on_every_request(self, connection):
        req = rq.read_secret_request(connection, SecretPath("MySecret"))
        
        assert req.headers == {"X-Vault-Token": b"s.test-token"}
    
    def test_content_type_with_body(self, connection):
        req = rq.engine_config_request(connection, 5, True)
        
        assert req.headers["Content-Type"] == "application/json"
        assert req.headers["X-Vault-Token"] == b"s.test-token"
    
    def test_token_not_in_repr(self, connection):
        req = rq.read_secret_request(connection, SecretPath("MySecret"))
        
        assert "s.test-token" not in repr(req)


class TestWriteBody:
    
    def test_write_allowed_omits_cas(self, connection):
        req = rq.write_secret_request(
            connection, WriteAllowed(), SecretPath("MySecret"), to_secret_data([("my", "password")])
        )
        
        assert req.method == "POST"
        assert req.url == f"{BASE}/data/MySecret"
        assert req.json == {"options": {}, "data": {"my": "password"}}
    
    def test_create_only_sets_cas_zero(self, connection):
        req = rq.write_secret_request(
            connection, CreateOnly(), SecretPath("MySecret"), to_secret_data([("my", "password")])
        )
        
        assert req.json["options"] == {"cas": 0}
    
    def test_current_version_sets_cas(self, connection):
        req = rq.write_secret_request(
            connection,
            CurrentVersion(version=4),
            SecretPath("MySecret"),
            to_secret_data([("my", "password")]),
        )
        
        assert req.json["options"] == {"cas": 4}


class TestConfigBody:
    
    def test_engine_config(self, connection):
        req = rq.engine_config_request(connection, 10, False)
        
        assert (req.method, req.url) == ("POST", f"{BASE}/config")
        assert req.json == {"max_versions": 10, "cas_required": False}
    
    def test_secret_config(self, connection):
        req = rq.secret_config_request(connection, SecretPath("MySecret"), 3, True)
        
        assert (req.method, req.url) == ("POST", f"{BASE}/metadata/MySecret")
        assert req.json == {"max_versions": 3, "cas_required": True}
