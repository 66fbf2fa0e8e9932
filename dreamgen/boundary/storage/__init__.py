"""
Object storage boundary for generation images.

Exports:
  - S3ImageStore: boto3-backed uploader returning public URLs
  - build_object_key: Key layout helper
"""

from dreamgen.boundary.storage.s3_image_store import S3ImageStore, build_object_key

__all__ = ["S3ImageStore", "build_object_key"]
