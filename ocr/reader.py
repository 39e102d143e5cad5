# ocr/reader.py
from __future__ import annotations
import argparse
import io
import logging
from dataclasses import dataclass
from math import floor
from pathlib import Path
from typing import List, Optional, Tuple, Union
import numpy as np
from PIL import Image, UnidentifiedImageError
import easyocr
import cv2

from bcc_core.errors import ScanError
from parser.normalizer import clean_lines

LOGGER = logging.getLogger("ocr")


@dataclass
class OCRSpan:
    text: str
    confidence: float
    bbox: List[Tuple[float, float]]  # [[x1,y1], [x2,y2], [x3,y3], [x4,y4]]

    @property
    def center(self) -> Tuple[float, float]:
        xs = [p[0] for p in self.bbox]
        ys = [p[1] for p in self.bbox]
        return sum(xs) / len(xs), sum(ys) / len(ys)


def _preprocess_strong(np_img: np.ndarray) -> np.ndarray:
    gray = cv2.cvtColor(np_img, cv2.COLOR_RGB2GRAY)
    gray = cv2.bilateralFilter(gray, d=7, sigmaColor=50, sigmaSpace=50)
    clahe = cv2.createCLAHE(clipLimit=2.0, tileGridSize=(8, 8))
    gray = clahe.apply(gray)
    thr = cv2.adaptiveThreshold(
        gray, 255, cv2.ADAPTIVE_THRESH_MEAN_C, cv2.THRESH_BINARY, 31, 10
    )
    return cv2.cvtColor(thr, cv2.COLOR_GRAY2RGB)


def _dedupe_spans(spans: List[OCRSpan]) -> List[OCRSpan]:
    # de-dupe by (lowercased text, quantized center), keep highest confidence
    best = {}
    for s in spans:
        cx, cy = s.center
        key = (s.text.strip().lower(), floor(cx / 10), floor(cy / 10))
        if key not in best or s.confidence > best[key].confidence:
            best[key] = s
    return list(best.values())


def _reading_order(spans: List[OCRSpan], row_px: int = 10) -> List[OCRSpan]:
    # top-to-bottom by quantized row, then left-to-right
    return sorted(spans, key=lambda s: (floor(s.center[1] / row_px), s.center[0]))


def _span_height(s: OCRSpan) -> float:
    ys = [p[1] for p in s.bbox]
    return max(ys) - min(ys)


def _group_rows(spans: List[OCRSpan], row_px: int = 10) -> List[List[OCRSpan]]:
    """
    Group spans into visual rows. A span joins the current row when its
    vertical center is within half a span height (at least row_px) of the
    row's first span. Each row is ordered left-to-right.
    """
    rows: List[List[OCRSpan]] = []
    for s in sorted(spans, key=lambda s: s.center[1]):
        if rows:
            anchor = rows[-1][0]
            tol = max(row_px, 0.5 * max(_span_height(anchor), _span_height(s)))
            if abs(s.center[1] - anchor.center[1]) <= tol:
                rows[-1].append(s)
                continue
        rows.append([s])
    return [sorted(row, key=lambda s: s.center[0]) for row in rows]


class Reader:
    """EasyOCR wrapper that turns a screenshot into cleaned text lines."""

    def __init__(
        self,
        languages: Optional[List[str]] = None,
        gpu: bool = False,
        min_confidence: float = 0.4,
    ):
        self.languages = languages or ["en"]
        self.min_confidence = float(min_confidence)
        self._reader = easyocr.Reader(self.languages, gpu=gpu, verbose=False)

    def read_lines(self, image_path: Union[str, Path]) -> List[str]:
        image_path = Path(image_path)
        try:
            img = Image.open(image_path).convert("RGB")
        except (UnidentifiedImageError, OSError) as e:
            raise ScanError.invalid_image() from e
        LOGGER.info("OCR %s", image_path.name)
        return self._lines_from(img)

    def read_bytes(self, data: bytes) -> List[str]:
        try:
            img = Image.open(io.BytesIO(data)).convert("RGB")
        except (UnidentifiedImageError, OSError) as e:
            raise ScanError.invalid_image() from e
        return self._lines_from(img)

    def read_spans(self, img: Image.Image) -> List[OCRSpan]:
        np_img = np.array(img)
        # Dual-pass OCR: raw RGB and strong-contrast variant
        spans: List[OCRSpan] = []
        try:
            for npv in (np_img, _preprocess_strong(np_img)):
                spans.extend(self._run_easyocr(npv))
        except Exception as e:
            raise ScanError.recognition_failed(e) from e
        return _reading_order(_dedupe_spans(spans))

    def _lines_from(self, img: Image.Image) -> List[str]:
        rows = _group_rows(self.read_spans(img))
        lines = clean_lines(" ".join(s.text for s in row) for row in rows)
        LOGGER.info("OCR produced %d line(s)", len(lines))
        return lines

    def _run_easyocr(self, np_img: np.ndarray) -> List[OCRSpan]:
        results = self._reader.readtext(np_img, detail=1, paragraph=False)
        spans: List[OCRSpan] = []
        for item in results:
            if not isinstance(item, (list, tuple)):
                continue
            if len(item) == 3:
                bbox, text, conf = item
            elif len(item) == 2:
                bbox, text = item
                conf = 1.0
            else:
                continue

            if not text or bbox is None:
                continue
            conf_f = float(conf)
            if conf_f < self.min_confidence:
                continue
            spans.append(OCRSpan(text=str(text).strip(), confidence=conf_f, bbox=bbox))
        return spans


def _cli():
    p = argparse.ArgumentParser(description="Run EasyOCR on a card screenshot.")
    p.add_argument("--input", required=True)
    p.add_argument("--outdir", default="data/interim/ocr_text")
    p.add_argument("--lang", nargs="+", default=["en"])
    p.add_argument("--gpu", action="store_true")
    p.add_argument("--min_conf", type=float, default=0.4)
    args = p.parse_args()
    reader = Reader(languages=args.lang, gpu=args.gpu, min_confidence=args.min_conf)
    lines = reader.read_lines(args.input)
    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)
    out_path = outdir / (Path(args.input).stem + ".txt")
    out_path.write_text("\n".join(lines), encoding="utf-8")
    print(f"[OK] OCR complete -> {out_path}")


if __name__ == "__main__":
    _cli()
