from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from loguru import logger

from seniormatch.matching.models import ProgramItem
from seniormatch.matching.programs import passage_text, point_id

from .embeddings import Embedder
from .vector_index import VectorIndex, VectorPoint


@dataclass
class IndexReport:
    total: int = 0
    success: int = 0
    failed: int = 0
    results: List[Dict[str, Any]] = field(default_factory=list)


async def index_programs(
    programs: Iterable[ProgramItem],
    embedder: Embedder,
    index: VectorIndex,
) -> IndexReport:
    """
    Embed each program's passage text and upsert it under a deterministic
    point id. A failing program is recorded in the report and skipped.
    """
    report = IndexReport()
    for program in programs:
        report.total += 1
        native_id = program.native_id
        entry: Dict[str, Any] = {"id": native_id, "title": program.title, "type": program.type}
        try:
            text = passage_text(program)
            vector = await embedder.embed(text, "passage")
            payload = program.model_copy(update={"original_id": native_id})
            await index.upsert([VectorPoint(id=point_id(native_id), vector=vector, payload=payload)])
            entry["status"] = "success"
            report.success += 1
        except Exception as exc:
            logger.warning("Failed to embed program {}: {}: {}", native_id, type(exc).__name__, exc)
            entry["status"] = "failed"
            entry["error"] = str(exc)
            report.failed += 1
        report.results.append(entry)
    logger.info("Indexed {} programs ({} failed)", report.success, report.failed)
    return report
