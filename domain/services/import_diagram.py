from __future__ import annotations

import json
import logging
from typing import Optional

from pydantic import ValidationError

from domain.models import Diagram
from domain.services.detect_format import FORMAT_ERASER, FORMAT_JSON, detect_format
from domain.services.diagram_compaction import restore
from domain.services.parse_eraser_dsl import EraserDslParser

logger = logging.getLogger(__name__)


def import_text(text: str, parser: Optional[EraserDslParser] = None) -> Optional[Diagram]:
    fmt = detect_format(text)
    if fmt == FORMAT_JSON:
        try:
            return restore(json.loads(text))
        except (ValidationError, TypeError, ValueError, RecursionError):
            logger.warning("Structured import is not a valid diagram", exc_info=True)
            return None
    if fmt == FORMAT_ERASER:
        return (parser or EraserDslParser()).parse(text)
    logger.info("Import text format not recognized")
    return None
