"""
Shared fixtures: a fake Vault server behind httpx.MockTransport.
"""

import asyncio
import json

import httpx
import pytest

from vault_kv_client import StaticDefaults, VaultKVClient, vault_connect

VAULT_ADDR = "https://vault.local.lan:8200"
TOKEN = "s.test-token"


class FakeVault:
    """Answers every request with the configured response and records it."""
    
    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.content = b""
        self.error = None
    
    def respond(self, status_code=200, json_body=None, content=b""):
        self.status_code = status_code
        self.content = json.dumps(json_body).encode() if json_body is not None else content
    
    def fail_with(self, error):
        self.error = error
    
    def handle(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, content=self.content)
    
    @property
    def last_request(self):
        return self.requests[-1]
    
    def last_json(self):
        return json.loads(self.last_request.content)


@pytest.fixture
def vault():
    return FakeVault()


@pytest.fixture
def connection(vault):
    result = vault_connect(
        VAULT_ADDR,
        "secret",
        TOKEN,
        defaults=StaticDefaults(),
        transport=httpx.MockTransport(vault.handle),
    )
    conn = result.unwrap()
    yield conn
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(conn.aclose())
    finally:
        loop.close()


@pytest.fixture
def client(connection):
    return VaultKVClient(connection)
