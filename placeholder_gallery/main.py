import logging
import sqlite3
from pathlib import Path
from typing import Iterator, List

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import FileResponse

from .batch import BatchRunner, build_runner
from .catalog import SqliteCatalog
from .config import Settings, get_settings
from .errors import InvalidCountError
from .schemas import AssetData, BatchRequest, BatchResponse, StatsResponse
from .storage import LocalAssetStore

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("placeholder-gallery")

app = FastAPI(title="Placeholder Gallery")


def get_catalog(settings: Settings = Depends(get_settings)) -> SqliteCatalog:
    return SqliteCatalog(settings.db_path, settings.thumbs_dir, settings.thumb_sizes)


def get_store(settings: Settings = Depends(get_settings)) -> LocalAssetStore:
    return LocalAssetStore(settings.uploads_dir, settings.public_base_url)


def get_runner(
    settings: Settings = Depends(get_settings),
    catalog: SqliteCatalog = Depends(get_catalog),
) -> Iterator[BatchRunner]:
    runner = build_runner(settings, catalog)
    try:
        yield runner
    finally:
        runner.importer.fetcher.close()


@app.on_event("startup")
def startup() -> None:
    settings = get_settings()
    settings.uploads_dir.mkdir(parents=True, exist_ok=True)
    settings.thumbs_dir.mkdir(parents=True, exist_ok=True)
    SqliteCatalog(settings.db_path, settings.thumbs_dir).init()


def _asset_data(r: sqlite3.Row, base: str) -> AssetData:
    asset_id = r["id"]

    # Dimensions and thumbnails only exist once derivatives were generated
    metadata = {"size_bytes": r["size_bytes"]}
    thumbnails = {}

    if r["metadata_generated_at"]:
        metadata.update({"width": r["width"], "height": r["height"], "format": (r["format"] or "").lower()})
        thumbnails = {
            "small": f"{base}/api/assets/{asset_id}/thumbnails/small",
            "medium": f"{base}/api/assets/{asset_id}/thumbnails/medium",
        }

    return AssetData(
        asset_id=asset_id,
        title=r["title"],
        filename=r["filename"],
        url=r["public_url"],
        mime_type=r["mime_type"],
        status=r["status"],
        created_at=r["created_at"],
        metadata=metadata,
        thumbnails=thumbnails,
        metadata_generated_at=r["metadata_generated_at"],
    )


@app.get("/")
def root():
    return {"message": "API is working"}


@app.post("/api/batches", response_model=BatchResponse)
def create_batch(payload: BatchRequest, runner: BatchRunner = Depends(get_runner)):
    logger.info("Batch requested: count=%d", payload.count)
    try:
        result = runner.run_batch(payload.count)
    except InvalidCountError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return BatchResponse(
        requested=result.requested,
        succeeded=result.succeeded,
        message=f"Successfully added {result.succeeded} placeholder images to the media gallery.",
    )


@app.get("/api/assets", response_model=List[AssetData])
def list_assets(request: Request, catalog: SqliteCatalog = Depends(get_catalog)):
    base = str(request.base_url).rstrip("/")
    return [_asset_data(r, base) for r in catalog.list_assets()]


@app.get("/api/assets/{asset_id}", response_model=AssetData)
def get_asset(asset_id: str, request: Request, catalog: SqliteCatalog = Depends(get_catalog)):
    r = catalog.get(asset_id)
    if not r:
        raise HTTPException(status_code=404, detail="Asset not found.")

    return _asset_data(r, str(request.base_url).rstrip("/"))


@app.get("/api/assets/{asset_id}/thumbnails/{size}")
def get_thumbnail(asset_id: str, size: str, catalog: SqliteCatalog = Depends(get_catalog)):
    if size not in ("small", "medium"):
        raise HTTPException(status_code=400, detail="size must be 'small' or 'medium'.")

    r = catalog.get(asset_id)
    if not r:
        raise HTTPException(status_code=404, detail="Asset not found.")

    if not r["metadata_generated_at"]:
        raise HTTPException(status_code=409, detail="Thumbnails were not generated for this asset.")

    path = r["thumb_small_path"] if size == "small" else r["thumb_medium_path"]
    if not path or not Path(path).exists():
        raise HTTPException(status_code=404, detail="Thumbnail not found.")

    return FileResponse(path, media_type="image/jpeg")


@app.get("/media/{file_path:path}")
def get_media(file_path: str, store: LocalAssetStore = Depends(get_store)):
    path = store.resolve(file_path)
    if path is None:
        raise HTTPException(status_code=404, detail="File not found.")

    return FileResponse(path, media_type="image/png")


@app.get("/api/stats", response_model=StatsResponse)
def get_stats(catalog: SqliteCatalog = Depends(get_catalog)):
    return StatsResponse(**catalog.stats())
