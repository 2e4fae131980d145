from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Tuple

from . import config
from .models import Artifact, RenderLog, get_session


ARTIFACT_NAMES = {
    "document": "document.json",
    "error": "error.log",
}


def invoice_dir(slug: str, base_dir: Optional[Path] = None) -> Path:
    if not slug or ".." in slug or "/" in slug or "\\" in slug:
        raise ValueError(f"Unsafe output slug: {slug!r}")
    path = (base_dir or config.OUT_DIR) / slug
    path.mkdir(parents=True, exist_ok=True)
    return path


def artifact_path(slug: str, artifact_type: str, base_dir: Optional[Path] = None) -> Path:
    filename = ARTIFACT_NAMES[artifact_type]
    return invoice_dir(slug, base_dir=base_dir) / filename


def clear_artifacts(slug: str, base_dir: Optional[Path] = None) -> None:
    """Remove artifacts a previous run left for this slug."""
    directory = invoice_dir(slug, base_dir=base_dir)
    for filename in ARTIFACT_NAMES.values():
        (directory / filename).unlink(missing_ok=True)


def record_artifacts(render: RenderLog, artifacts: Iterable[Tuple[str, Path]]) -> None:
    with get_session() as session:
        for artifact_type, path in artifacts:
            session.add(
                Artifact(
                    render_id=render.id,
                    type=artifact_type,
                    path=str(path.relative_to(config.OUT_DIR)),
                )
            )
        session.commit()
