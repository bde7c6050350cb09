"""
Upload files to Glacier
"""
import asyncio
from glacierpy import GlacierUploader, UploadConfig, UploadError, RetryPolicy, setup_logging


async def main():
    setup_logging()

    # Small file, single request to the default vault
    async with GlacierUploader() as glacier:
        result = await glacier.upload("notes.txt")
        print(f"Uploaded: {result.archive_id}")

    # Large file in 64 MB parts, 8 at a time, with a description
    config = UploadConfig.from_options(
        size_mb=64,
        concurrency=8,
        vault_name="backups",
        description="nightly database dump",
        retry=RetryPolicy(times=3, interval_ms=500)
    )
    async with GlacierUploader(config) as glacier:
        try:
            result = await glacier.upload("dump.tar.gz")
            print(f"Archive ID: {result.archive_id}")
        except UploadError as e:
            print(f"{e.kind.name}: {e.message}")

    # Dry run: plan and hash only, nothing is sent
    async with GlacierUploader(UploadConfig(dry_run=True)) as glacier:
        result = await glacier.upload("dump.tar.gz")
        print(f"Dry run: {result.archive_id}")


if __name__ == "__main__":
    asyncio.run(main())
