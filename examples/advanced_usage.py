#!/usr/bin/env python3
"""
Advanced usage examples for the Vault KV Python client
Demonstrates async calls, check-and-set updates and version management
"""

import asyncio
import logging

from vault_kv_client import (
    ClientConfig,
    CurrentVersion,
    SecretPath,
    VaultKVClient,
    is_folder,
    to_secret_data,
    to_secret_versions,
    vault_connect,
)

# Configure logging
logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)

async def check_and_set_example(client: VaultKVClient):
    """Update a secret only if nobody wrote it in between"""
    logger.info("=== Check-and-Set Example ===")
    
    path = SecretPath("service/api-key")
    current = (await client.acurrent_secret_version(path)).unwrap()
    
    written = await client.aput_secret(
        CurrentVersion(version=current),
        path,
        to_secret_data([("key", "rotated-api-key")]),
    )
    if written.ok:
        logger.info(f"Wrote version {written.value} on top of {current}")
    else:
        logger.warning(f"Concurrent update detected: {written.error}")

async def version_management_example(client: VaultKVClient):
    """Inspect, soft delete, restore and destroy versions"""
    logger.info("=== Version Management Example ===")
    
    path = SecretPath("service/api-key")
    metadata = (await client.aread_secret_metadata(path)).unwrap()
    for version, record in sorted(metadata.versions.items()):
        logger.info(
            f"v{version}: created {record.created_time}, "
            f"deleted {record.deletion_time or '-'}, destroyed {record.destroyed}"
        )
    
    oldest = to_secret_versions([metadata.oldest_version])
    error = await client.adelete_secret_versions(path, oldest)
    if error is None:
        error = await client.aundelete_secret_versions(path, oldest)
    if error is not None:
        logger.error(f"Version update failed: {error}")
    
    destroyed = await client.adestroy_secret_versions(path, oldest)
    logger.info(f"Destroy response: {destroyed.value}")

async def listing_example(client: VaultKVClient):
    """Walk the secret tree"""
    logger.info("=== Listing Example ===")
    
    keys = (await client.asecrets_list(SecretPath("service/"))).unwrap()
    for key in keys:
        logger.info(f"{'folder' if is_folder(key) else 'secret'}: {key}")

async def main():
    connection = vault_connect(
        "https://localhost:8200",
        "secret",
        None,
        disable_cert_validation=True,
        config=ClientConfig(log_requests=True, log_responses=True),
    ).unwrap()
    
    async with VaultKVClient(connection) as client:
        # Keep at most 5 versions and require cas on every write
        (await client.akv_engine_config(5, True)).unwrap()
        
        await check_and_set_example(client)
        await version_management_example(client)
        await listing_example(client)

if __name__ == "__main__":
    asyncio.run(main())
