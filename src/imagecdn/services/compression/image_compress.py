import io
import os
from PIL import Image

JPEG_QUALITY = 80
WEBP_QUALITY = 80
PNG_COMPRESS_LEVEL = 9

JPEG_EXTENSIONS = {".jpg", ".jpeg"}
PNG_SAVE_MODES = {"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"}
HIGH_DEPTH_MODES = {"I", "I;16", "I;16B", "I;16L"}


def _has_alpha(img: Image.Image) -> bool:
    return img.mode in ("RGBA", "LA", "PA") or ("transparency" in img.info)


def _to_8bit(img: Image.Image) -> Image.Image:
    # 16-bit grayscale would clip to white on a plain convert; rescale first
    if img.mode in HIGH_DEPTH_MODES:
        return img.convert("I").point(lambda v: v * (1 / 256)).convert("L")
    return img


def _flatten_to_rgb(img: Image.Image) -> Image.Image:
    """
    JPEG has no alpha channel: composite transparent images over white so the
    visual look is kept instead of getting a black background.
    """
    if not _has_alpha(img):
        return img.convert("RGB")
    rgba = img.convert("RGBA")
    bg = Image.new("RGB", rgba.size, (255, 255, 255))
    bg.paste(rgba, mask=rgba.split()[3])
    return bg


def _open_image(data: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(data))
    # decode now so corrupt payloads fail before the output file is created
    img.load()
    return img


def compress_image_to_storage(data: bytes, filename: str, upload_dir: str) -> str:
    """
    Re-encodes image bytes and writes them to upload_dir/filename.
    Returns the path written.

    Strategy, by lower-cased extension of filename:
    - .jpg/.jpeg -> optimized progressive JPEG, quality 80
    - .png       -> PNG at maximum zlib compression with optimize pass
    - .webp      -> lossy WebP, quality 80
    - others     -> bytes written unchanged
    """
    if upload_dir and not os.path.exists(upload_dir):
        os.makedirs(upload_dir, exist_ok=True)

    out_path = os.path.join(upload_dir, filename)
    _, ext = os.path.splitext(filename.lower())

    if ext in JPEG_EXTENSIONS:
        img = _open_image(data)
        _flatten_to_rgb(_to_8bit(img)).save(out_path, "JPEG", quality=JPEG_QUALITY, optimize=True, progressive=True)
    elif ext == ".png":
        img = _open_image(data)
        if img.mode not in PNG_SAVE_MODES:
            img = img.convert("RGBA")
        img.save(out_path, "PNG", compress_level=PNG_COMPRESS_LEVEL, optimize=True)
    elif ext == ".webp":
        img = _open_image(data)
        img = _to_8bit(img)
        img = img.convert("RGBA" if _has_alpha(img) else "RGB")
        img.save(out_path, "WEBP", quality=WEBP_QUALITY)
    else:
        with open(out_path, "wb") as fh:
            fh.write(data)

    return out_path
