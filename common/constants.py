"""Project-wide constants (chunk size, relay paths, CORS headers)."""

CHUNK_SIZE_BYTES: int = 5 * 1024 * 1024  # 5 MiB default chunk size

UPLOAD_CHUNK_PATH = "/upload-chunk"
COMPLETE_UPLOAD_PATH = "/complete-upload"

UPSTREAM_UPLOAD_CHUNK_PATH = "/api/upload-chunk"
UPSTREAM_COMBINE_CHUNKS_PATH = "/api/combine-chunks"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}
