#!/usr/bin/env python3
"""Run a single storage operation from the command line.

Usage:
  .venv/bin/python scripts/storage_cli.py list-buckets
  .venv/bin/python scripts/storage_cli.py create-bucket test-bucket --public
  .venv/bin/python scripts/storage_cli.py remove-file test-bucket path/to/file.png

Credentials come from SUPABASE_API_KEY plus SUPABASE_REFERENCE_ID or
STORAGE_URL (environment or a local .env file).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from supastore import StorageClient, StorageError
from supastore.common.logging import setup_logging

logger = logging.getLogger("supastore.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Supabase Storage command line")
    parser.add_argument("--verbose", action="store_true", help="Log every request")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list-buckets", help="List all buckets")

    for name in ("get-bucket", "delete-bucket", "empty-bucket"):
        cmd = sub.add_parser(name)
        cmd.add_argument("bucket_id")

    for name in ("create-bucket", "update-bucket"):
        cmd = sub.add_parser(name)
        cmd.add_argument("bucket_id")
        cmd.add_argument("--public", action="store_true", help="Make the bucket public")

    upload = sub.add_parser("upload-file")
    upload.add_argument("bucket_id")
    upload.add_argument("path")
    upload.add_argument("source", type=Path)
    upload.add_argument("--content-type", default="application/octet-stream")
    upload.add_argument("--upsert", action="store_true")

    download = sub.add_parser("download-file")
    download.add_argument("bucket_id")
    download.add_argument("path")
    download.add_argument("target", type=Path)

    listing = sub.add_parser("list-files")
    listing.add_argument("bucket_id")
    listing.add_argument("prefix", nargs="?", default=None)

    remove = sub.add_parser("remove-file")
    remove.add_argument("bucket_id")
    remove.add_argument("paths", nargs="+")

    sign = sub.add_parser("sign-url")
    sign.add_argument("bucket_id")
    sign.add_argument("path")
    sign.add_argument("--expires-in", type=int, default=3600)

    public = sub.add_parser("public-url")
    public.add_argument("bucket_id")
    public.add_argument("path")

    return parser


def run(args: argparse.Namespace, client: StorageClient) -> Any:
    command = args.command
    if command == "list-buckets":
        return client.list_buckets()
    if command == "get-bucket":
        return client.get_bucket(args.bucket_id)
    if command == "delete-bucket":
        return client.delete_bucket(args.bucket_id)
    if command == "empty-bucket":
        return client.empty_bucket(args.bucket_id)
    if command == "create-bucket":
        return client.create_bucket(args.bucket_id, {"public": args.public})
    if command == "update-bucket":
        return client.update_bucket(args.bucket_id, {"public": args.public})

    files = client.from_(args.bucket_id)
    if command == "upload-file":
        return files.upload(
            args.path,
            args.source,
            {"content_type": args.content_type, "upsert": args.upsert},
        )
    if command == "download-file":
        data = files.download(args.path)
        args.target.write_bytes(data)
        return {"path": str(args.target), "size": len(data)}
    if command == "list-files":
        return files.list(args.prefix)
    if command == "remove-file":
        return files.remove(args.paths)
    if command == "sign-url":
        return files.create_signed_url(args.path, args.expires_in)
    if command == "public-url":
        return {"publicURL": files.get_public_url(args.path)}
    raise ValueError(f"Unknown command: {command}")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO")
    try:
        client = StorageClient.from_settings()
        result = run(args, client)
    except (StorageError, ValueError) as exc:
        logger.error("storage command failed: %s", exc)
        return 1
    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
