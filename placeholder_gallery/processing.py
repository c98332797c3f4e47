from pathlib import Path
from PIL import Image
from typing import Dict, Any

# name -> longest edge in pixels
DEFAULT_THUMB_SIZES = {"small": 256, "medium": 512}

JPEG_QUALITY = 85


def make_thumbnails(image_path: Path, asset_id: str, thumbs_dir: Path, sizes: Dict[str, int]) -> Dict[str, str]:
    """
    Writes one JPEG per named size, never upscaling. Returns {name: path}.
    """
    thumbs_dir.mkdir(parents=True, exist_ok=True)
    paths = {}

    with Image.open(image_path) as im:
        rgb = im.convert("RGB")

    for name, edge in sizes.items():
        thumb = rgb.copy()
        thumb.thumbnail((edge, edge))
        path = thumbs_dir / f"{asset_id}_{name}.jpg"
        thumb.save(path, format="JPEG", quality=JPEG_QUALITY)
        paths[name] = str(path)

    return paths


def extract_metadata(image_path: Path) -> Dict[str, Any]:
    with Image.open(image_path) as im:
        return {
            "width": im.width,
            "height": im.height,
            "format": (im.format or "").upper(),
        }
