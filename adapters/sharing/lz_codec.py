from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, cast
from urllib.parse import parse_qs, urlsplit

from lzstring import LZString  # type: ignore[import-untyped]
from pydantic import ValidationError

from domain.errors import EncodingError, GenerationError, ShareLinkTooLongError
from domain.models import Diagram
from domain.services.diagram_compaction import has_collections, optimize, restore

logger = logging.getLogger(__name__)

DATA_PARAM = "data"
DEFAULT_MAX_SIZE_KB = 50.0
DEFAULT_MAX_URL_LENGTH = 2000


@dataclass(frozen=True)
class SizeBudgetReport:
    within_budget: bool
    original_size_kb: float
    compressed_size_kb: float
    max_size_kb: float

    @property
    def message(self) -> str:
        usage = f"{self.compressed_size_kb:.2f}KB/{self.max_size_kb:g}KB"
        if self.within_budget:
            return f"Data size is within budget ({usage})"
        return f"Data size exceeds budget ({usage})"


@dataclass(frozen=True)
class CompressionStats:
    original: int
    lz_string: int
    base64: int

    @property
    def lz_string_ratio(self) -> float:
        return self.lz_string / self.original * 100 if self.original else 0.0

    @property
    def base64_ratio(self) -> float:
        return self.base64 / self.original * 100 if self.original else 0.0

    @property
    def improvement(self) -> float:
        return (self.base64 - self.lz_string) / self.base64 * 100 if self.base64 else 0.0


def dump_payload(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=True, separators=(",", ":"))


def compress(diagram: Optional[Diagram]) -> str:
    if diagram is None:
        raise EncodingError("Cannot compress a missing diagram")
    encoded = LZString().compressToEncodedURIComponent(dump_payload(optimize(diagram)))
    if not encoded:
        raise EncodingError("Compressor produced an empty payload")
    return cast(str, encoded)


def decompress(text: Optional[str], allow_legacy_fallback: bool = False) -> Optional[Diagram]:
    if not text or not text.strip():
        return None
    diagram = _decode_lz(text)
    if diagram is not None:
        return diagram
    if allow_legacy_fallback:
        return _decode_legacy(text)
    return None


def encode_legacy(diagram: Diagram) -> str:
    payload = dump_payload(diagram.to_wire()).encode("utf-8")
    return base64.b64encode(payload).decode("ascii")


def build_share_link(diagram: Optional[Diagram], base_url: str) -> str:
    try:
        encoded = compress(diagram)
    except EncodingError as exc:
        raise GenerationError("Failed to generate share link") from exc
    return f"{base_url}?{DATA_PARAM}={encoded}"


def ensure_link_length(url: str, max_length: int = DEFAULT_MAX_URL_LENGTH) -> str:
    if len(url) > max_length:
        raise ShareLinkTooLongError(len(url), max_length)
    return url


def parse_share_link(url: str) -> Optional[Diagram]:
    try:
        query = urlsplit(url).query
    except ValueError:
        logger.warning("Share link is not a valid URL")
        return None
    values = parse_qs(query).get(DATA_PARAM)
    if not values or not values[0]:
        return None
    return decompress(values[0], allow_legacy_fallback=True)


def check_size_budget(
    diagram: Diagram, max_size_kb: float = DEFAULT_MAX_SIZE_KB
) -> SizeBudgetReport:
    original_size_kb = len(dump_payload(diagram.to_wire())) / 1024
    compressed_size_kb = len(compress(diagram)) / 1024
    return SizeBudgetReport(
        within_budget=compressed_size_kb <= max_size_kb,
        original_size_kb=round(original_size_kb, 2),
        compressed_size_kb=round(compressed_size_kb, 2),
        max_size_kb=max_size_kb,
    )


def compare_compression(diagram: Diagram) -> CompressionStats:
    return CompressionStats(
        original=len(dump_payload(diagram.to_wire())),
        lz_string=len(compress(diagram)),
        base64=len(encode_legacy(diagram)),
    )


def _decode_lz(text: str) -> Optional[Diagram]:
    try:
        decompressed = LZString().decompressFromEncodedURIComponent(text)
    except Exception:  # noqa: BLE001
        logger.debug("LZ-string payload could not be decompressed", exc_info=True)
        return None
    if not decompressed:
        return None
    return _parse_payload(decompressed, source="lz-string")


def _decode_legacy(text: str) -> Optional[Diagram]:
    try:
        raw = base64.b64decode(text.strip().replace(" ", "+"), validate=True)
    except (binascii.Error, ValueError):
        logger.warning("Legacy share payload is not valid base64")
        return None
    try:
        decoded = raw.decode("utf-8")
    except UnicodeDecodeError:
        decoded = raw.decode("latin-1")
    return _parse_payload(decoded, source="legacy base64")


def _parse_payload(text: str, source: str) -> Optional[Diagram]:
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        logger.debug("%s payload is not JSON", source)
        return None
    if not isinstance(parsed, dict) or not has_collections(parsed):
        logger.debug("%s payload is not a diagram object", source)
        return None
    try:
        return restore(parsed)
    except (ValidationError, TypeError, ValueError):
        logger.warning("%s payload is not a valid diagram", source, exc_info=True)
        return None
