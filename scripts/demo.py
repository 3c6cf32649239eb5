#!/usr/bin/env python3
"""
End-to-end demo of the storage facade against a live MinIO/S3 endpoint.

Prerequisites:
    1. A MinIO server reachable at S3_ENDPOINT (default http://localhost:9000)
    2. Credentials in S3_ACCESS_KEY / S3_SECRET_KEY (or .env)

Usage:
    python scripts/demo.py

    # Use a specific bucket:
    python scripts/demo.py --bucket my-demo-bucket

    # Leave the bucket in place afterwards:
    python scripts/demo.py --keep-bucket
"""

import argparse
import sys
import time
from pathlib import Path

from cloudstore.core.config import Settings, settings
from cloudstore.core.logging import setup_logging
from cloudstore.deps import get_storage
from cloudstore.storage import ObjectStorage, StorageError


class DemoCheckFailed(RuntimeError):
    """A post-condition observed through the facade did not hold."""


def check(condition: bool, message: str) -> None:
    if not condition:
        raise DemoCheckFailed(message)


def create_local_file(path: Path) -> None:
    """Write a small text file to upload."""
    path.write_text(
        "This is a test file for the cloudstore operations.\n"
        f"Timestamp: {int(time.time() * 1000)}\n"
    )
    print(f"  Local test file created at: {path}")


def run_demo(storage: ObjectStorage, settings: Settings, bucket: str, keep_bucket: bool) -> None:
    """Run every facade operation once, verifying each step."""
    local_file = Path(settings.DEMO_LOCAL_FILE)
    download_path = Path(settings.DEMO_DOWNLOAD_PATH)
    upload_key = settings.DEMO_UPLOAD_KEY
    copy_key = settings.DEMO_COPY_KEY
    move_key = settings.DEMO_MOVE_KEY
    upload_prefix = upload_key.rsplit("/", 1)[0] + "/" if "/" in upload_key else ""

    # Step 1: Bucket
    print(f"\n[1/8] Checking and creating bucket '{bucket}'...")
    if not storage.bucket_exists(bucket):
        storage.create_bucket(bucket)
        print(f"  Bucket '{bucket}' created")
    else:
        print(f"  Bucket '{bucket}' already existed. Proceeding.")

    # Step 2: Upload
    print(f"\n[2/8] Uploading '{local_file}' to '{upload_key}'...")
    storage.upload_file(str(local_file), bucket, upload_key)
    check(storage.file_exists(bucket, upload_key), "The uploaded file was not found!")
    print("  Upload verified")

    # Step 3: Listing and info
    print("\n[3/8] Listing files and getting information...")
    files = storage.list_files(bucket, upload_prefix)
    print(f"  Files under '{upload_prefix}': {files}")
    info = storage.get_file_info(bucket, upload_key)
    print(f"  Size: {info['Content-Length']} bytes, type: {info['Content-Type']}")

    # Step 4: Copy
    print(f"\n[4/8] Copying file to '{copy_key}'...")
    storage.copy_file(bucket, upload_key, bucket, copy_key)
    check(storage.file_exists(bucket, copy_key), "The copied file was not found!")
    print("  Copy verified")

    # Step 5: Move
    print(f"\n[5/8] Moving copied file to '{move_key}'...")
    storage.move_file(bucket, copy_key, bucket, move_key)
    check(not storage.file_exists(bucket, copy_key), "The source file for the move still exists!")
    check(storage.file_exists(bucket, move_key), "The moved file was not found at the destination!")
    print("  Move verified (source deleted, destination exists)")

    # Step 6: Download
    print(f"\n[6/8] Downloading original file to '{download_path}'...")
    storage.download_file(bucket, upload_key, str(download_path))
    check(download_path.exists(), "The downloaded file was not created locally!")
    print("  Download verified")

    # Step 7: Delete objects
    print(f"\n[7/8] Deleting '{upload_key}' and '{move_key}'...")
    storage.delete_file(bucket, upload_key)
    storage.delete_file(bucket, move_key)
    check(
        not storage.file_exists(bucket, upload_key) and not storage.file_exists(bucket, move_key),
        "One of the deleted files still exists in the bucket!",
    )
    print("  Deletion verified")

    # Step 8: Delete bucket
    if keep_bucket:
        print(f"\n[8/8] Keeping bucket '{bucket}'")
        return
    print(f"\n[8/8] Deleting bucket '{bucket}'...")
    for key in storage.list_files(bucket):
        storage.delete_file(bucket, key)
    storage.delete_bucket(bucket)
    check(not storage.bucket_exists(bucket), "The test bucket was not deleted!")
    print("  Bucket deletion verified")


def remove_local_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        print(f"  Could not delete local file {path}: {e}")


def main():
    parser = argparse.ArgumentParser(description="E2E demo for the cloudstore facade")
    parser.add_argument("--bucket", "-b", help="Bucket to use (default: DEMO_BUCKET)")
    parser.add_argument("--keep-bucket", action="store_true", help="Do not delete the bucket")
    args = parser.parse_args()

    setup_logging(settings.LOG_LEVEL)
    bucket = args.bucket or settings.DEMO_BUCKET

    print("=" * 60)
    print("CLOUDSTORE - E2E DEMO")
    print("=" * 60)
    print(f"Endpoint: {settings.S3_ENDPOINT}")

    local_file = Path(settings.DEMO_LOCAL_FILE)
    download_path = Path(settings.DEMO_DOWNLOAD_PATH)
    create_local_file(local_file)

    exit_code = 0
    try:
        run_demo(get_storage(), settings, bucket, args.keep_bucket)
    except StorageError as e:
        print(f"\n  Storage error ({e.kind.value}) during {e.op}: {e.message}")
        if e.cause is not None:
            print(f"  Caused by: {e.cause!r}")
        exit_code = 1
    except DemoCheckFailed as e:
        print(f"\n  Check failed: {e}")
        exit_code = 1
    finally:
        remove_local_file(local_file)
        remove_local_file(download_path)
        print("  Local test files removed")

    print("\n" + "=" * 60)
    print("ALL OPERATIONS EXECUTED CORRECTLY" if exit_code == 0 else "DEMO FAILED")
    print("=" * 60)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
