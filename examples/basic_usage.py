#!/usr/bin/env python3
"""
Basic usage example for the Vault KV Python client
"""

from vault_kv_client import (
    ClientConfig,
    CreateOnly,
    SecretPath,
    VaultKVClient,
    from_secret_data,
    to_secret_data,
    vault_connect,
)

def main():
    # Configure client
    config = ClientConfig(
        timeout=30,
        max_connections=10,
    )
    
    # Address from VAULT_ADDR, token from ~/.vault-token
    connection = vault_connect(None, "secret", None, False, config=config).unwrap()
    
    with VaultKVClient(connection) as client:
        path = SecretPath("database-password")
        
        # Create a secret, failing if it already exists
        created = client.put_secret(
            CreateOnly(),
            path,
            to_secret_data([("username", "app"), ("password", "super-secret-password")]),
        )
        if not created.ok:
            print(f"Could not create secret: {created.error}")
            return
        print(f"Created secret version {created.value}")
        
        # Retrieve the secret
        secret = client.get_secret(path).unwrap()
        print(f"Retrieved keys: {[key for key, _ in from_secret_data(secret)]}")
        
        # List secrets
        keys = client.secrets_list(SecretPath("")).unwrap()
        print(f"Found {len(keys)} secrets")

if __name__ == "__main__":
    main()
